"""Kernel publication – records, store and serializer ports."""
from mp_events.kernel.publication.record import EventPublication, PublicationRecord
from mp_events.kernel.publication.serializer import EventSerializer
from mp_events.kernel.publication.store import PublicationStore

__all__ = [
    "EventPublication",
    "EventSerializer",
    "PublicationRecord",
    "PublicationStore",
]
