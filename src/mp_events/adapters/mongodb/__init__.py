"""MongoDB adapter — publication store, document serializer, UoW.

Requires the ``mongodb`` extra::

    pip install "mp-events[mongodb]"
"""

from mp_events.adapters.mongodb.publication_store import MongoPublicationStore
from mp_events.adapters.mongodb.serializer import MongoDocumentEventSerializer
from mp_events.adapters.mongodb.uow import MongoUnitOfWork

__all__ = [
    "MongoDocumentEventSerializer",
    "MongoPublicationStore",
    "MongoUnitOfWork",
]
