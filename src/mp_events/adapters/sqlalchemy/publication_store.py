"""SQLAlchemy adapter – SqlAlchemyPublicationStore."""
from __future__ import annotations

import contextlib
from datetime import UTC, datetime
from typing import Any, AsyncIterator, Callable

from sqlalchemy import select, update

from mp_events.adapters.sqlalchemy.models import EventPublicationModel
from mp_events.adapters.sqlalchemy.uow import SqlAlchemyUnitOfWork
from mp_events.kernel.publication import PublicationRecord, PublicationStore
from mp_events.kernel.uow import current_unit_of_work


class SqlAlchemyPublicationStore(PublicationStore):
    """SQLAlchemy-backed publication store.

    Joins the session of an ambient :class:`SqlAlchemyUnitOfWork`; otherwise
    each call runs in its own session and commits immediately.
    """

    def __init__(
        self,
        session_factory: Callable[[], Any],
        model: type[EventPublicationModel] = EventPublicationModel,
    ) -> None:
        self._factory = session_factory
        self._model = model

    @contextlib.asynccontextmanager
    async def _session(self) -> AsyncIterator[Any]:
        uow = current_unit_of_work()
        if isinstance(uow, SqlAlchemyUnitOfWork):
            yield uow.session
            return
        async with self._factory() as session:
            yield session
            await session.commit()

    async def save(self, record: PublicationRecord) -> None:
        async with self._session() as session:
            session.add(self._model(**self._record_to_dict(record)))
            await session.flush()

    async def find_incomplete(self) -> list[PublicationRecord]:
        async with self._session() as session:
            result = await session.execute(
                select(self._model)
                .where(self._model.completion_date.is_(None))
                .order_by(self._model.publication_date)
            )
            return [self._row_to_record(row) for row in result.scalars().all()]

    async def find_by_serialized_event_and_listener_id(
        self, serialized_event: Any, listener_id: str
    ) -> PublicationRecord | None:
        async with self._session() as session:
            result = await session.execute(
                select(self._model)
                .where(
                    self._model.serialized_event == serialized_event,
                    self._model.listener_id == listener_id,
                    self._model.completion_date.is_(None),
                )
                .limit(1)
            )
            row = result.scalars().first()
            return self._row_to_record(row) if row is not None else None

    async def mark_completed(self, record_id: str, completion_date: datetime) -> bool:
        async with self._session() as session:
            result = await session.execute(
                update(self._model)
                .where(self._model.id == record_id, self._model.completion_date.is_(None))
                .values(completion_date=completion_date)
            )
            return result.rowcount == 1

    @staticmethod
    def _aware(value: datetime | None) -> datetime | None:
        # SQLite drops the offset of timezone-aware columns
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def _record_to_dict(self, record: PublicationRecord) -> dict[str, Any]:
        return {
            "id": record.id,
            "publication_date": record.publication_date,
            "listener_id": record.listener_id,
            "serialized_event": record.serialized_event,
            "event_type": record.event_type,
            "completion_date": record.completion_date,
        }

    def _row_to_record(self, row: Any) -> PublicationRecord:
        return PublicationRecord(
            id=row.id,
            publication_date=self._aware(row.publication_date),  # type: ignore[arg-type]
            listener_id=row.listener_id,
            serialized_event=row.serialized_event,
            event_type=row.event_type,
            completion_date=self._aware(row.completion_date),
        )


__all__ = ["SqlAlchemyPublicationStore"]
