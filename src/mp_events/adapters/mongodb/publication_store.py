"""MongoDB adapter — MongoPublicationStore."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from mp_events.adapters.mongodb.uow import MongoUnitOfWork
from mp_events.kernel.publication import PublicationRecord, PublicationStore
from mp_events.kernel.uow import current_unit_of_work

if TYPE_CHECKING:
    from mp_events.config.settings import PublicationSettings


class MongoPublicationStore(PublicationStore):
    """MongoDB-backed publication store (motor collection).

    Stores records in the ``event_publications`` collection by default.  Call
    :meth:`create_indexes` once on startup to create:

    - an index on ``completion_date`` for the incomplete-publication scan;
    - a compound index on ``(listener_id, completion_date)`` for the
      natural-key lookup issued on completion.

    When a :class:`MongoUnitOfWork` is ambient every operation joins its
    session.
    """

    COLLECTION_NAME = "event_publications"

    def __init__(self, collection: Any) -> None:
        self._col = collection

    @classmethod
    def from_database(
        cls, database: Any, settings: PublicationSettings | None = None
    ) -> MongoPublicationStore:
        """Bind to ``settings.mongo_collection`` (or the default collection) of *database*."""
        name = settings.mongo_collection if settings is not None else cls.COLLECTION_NAME
        return cls(database[name])

    # ------------------------------------------------------------------
    # Index management
    # ------------------------------------------------------------------

    @classmethod
    async def create_indexes(cls, collection: Any) -> None:
        """Create the lookup indexes; existing indexes are left untouched."""
        await collection.create_index("completion_date", name="idx_publication_completion")
        await collection.create_index(
            [("listener_id", 1), ("completion_date", 1)],
            name="idx_publication_listener",
        )

    # ------------------------------------------------------------------
    # PublicationStore interface
    # ------------------------------------------------------------------

    async def save(self, record: PublicationRecord) -> None:
        await self._col.insert_one(self._to_doc(record), session=self._session())

    async def find_incomplete(self) -> list[PublicationRecord]:
        cursor = self._col.find({"completion_date": None}, session=self._session())
        return [self._from_doc(doc) async for doc in cursor]

    async def find_by_serialized_event_and_listener_id(
        self, serialized_event: Any, listener_id: str
    ) -> PublicationRecord | None:
        doc = await self._col.find_one(
            {
                "serialized_event": serialized_event,
                "listener_id": listener_id,
                "completion_date": None,
            },
            session=self._session(),
        )
        return self._from_doc(doc) if doc is not None else None

    async def mark_completed(self, record_id: str, completion_date: datetime) -> bool:
        result = await self._col.update_one(
            {"_id": record_id, "completion_date": None},
            {"$set": {"completion_date": completion_date}},
            session=self._session(),
        )
        return result.modified_count == 1

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _session() -> Any:
        uow = current_unit_of_work()
        return uow.session if isinstance(uow, MongoUnitOfWork) else None

    @staticmethod
    def _aware(value: datetime | None) -> datetime | None:
        # BSON dates come back naive unless the client is tz_aware
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def _to_doc(self, record: PublicationRecord) -> dict[str, Any]:
        return {
            "_id": record.id,
            "publication_date": record.publication_date,
            "listener_id": record.listener_id,
            "serialized_event": record.serialized_event,
            "event_type": record.event_type,
            "completion_date": record.completion_date,
        }

    def _from_doc(self, doc: dict[str, Any]) -> PublicationRecord:
        return PublicationRecord(
            id=doc["_id"],
            publication_date=self._aware(doc["publication_date"]),  # type: ignore[arg-type]
            listener_id=doc["listener_id"],
            serialized_event=doc["serialized_event"],
            event_type=doc["event_type"],
            completion_date=self._aware(doc.get("completion_date")),
        )


__all__ = ["MongoPublicationStore"]
