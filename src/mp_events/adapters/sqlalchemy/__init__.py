"""SQLAlchemy adapter – publication store, ORM model, UoW and sessions.

Requires the ``sqlalchemy`` extra::

    pip install "mp-events[sqlalchemy]"
"""
from mp_events.adapters.sqlalchemy.models import EventPublicationModel, PublicationBase
from mp_events.adapters.sqlalchemy.publication_store import SqlAlchemyPublicationStore
from mp_events.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from mp_events.adapters.sqlalchemy.uow import SqlAlchemyUnitOfWork

__all__ = [
    "EventPublicationModel",
    "PublicationBase",
    "SqlAlchemyPublicationStore",
    "SqlAlchemySessionFactory",
    "SqlAlchemyUnitOfWork",
]
