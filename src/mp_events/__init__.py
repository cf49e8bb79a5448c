"""
mp_events – Durable in-process event publication.

Import path convention::

    from mp_events.kernel.events import DomainEvent, PayloadEvent
    from mp_events.application.publication import (
        EventPublicationRegistry,
        ListenerRegistry,
        PersistentEventDispatcher,
        PublicationReplayer,
    )
    from mp_events.adapters.mongodb import MongoPublicationStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
