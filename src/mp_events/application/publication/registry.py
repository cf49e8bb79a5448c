"""Application publication – EventPublicationRegistry.

Orchestrates the serializer and the publication store behind a
delivery-oriented API:

- :meth:`~EventPublicationRegistry.store` records one pending publication per
  durable listener, inside the caller's unit of work;
- :meth:`~EventPublicationRegistry.mark_completed` completes the matching
  record in an *independent* unit of work, because the completion signal
  arrives after the publishing transaction has already committed;
- :meth:`~EventPublicationRegistry.shutdown` reports what is still pending.
"""
from __future__ import annotations

import contextlib
import logging
from typing import Any, AsyncIterator, Iterable

from mp_events.application.publication.listener import ListenerDescriptor
from mp_events.application.publication.serializers import JsonEventSerializer
from mp_events.kernel.errors import BaseError, PublicationStoreError
from mp_events.kernel.events import event_type_name, unwrap
from mp_events.kernel.publication import (
    EventPublication,
    EventSerializer,
    PublicationRecord,
    PublicationStore,
)
from mp_events.kernel.time import Clock, SystemClock
from mp_events.kernel.uow import UnitOfWorkFactory, suspended_unit_of_work

logger = logging.getLogger(__name__)


def _listener_id(listener: ListenerDescriptor | str) -> str:
    return listener if isinstance(listener, str) else listener.id


class EventPublicationRegistry:
    """Registry of event publications backed by a :class:`PublicationStore`.

    Parameters
    ----------
    store:
        Durable publication storage.
    serializer:
        Converts events to their stored form.  The same instance must be used
        for storing and completing; defaults to :class:`JsonEventSerializer`.
    clock:
        Source of publication and completion timestamps.
    unit_of_work_factory:
        Creates the independent unit of work used for completion.  Without it
        completion runs detached from any ambient unit of work.
    """

    def __init__(
        self,
        store: PublicationStore,
        serializer: EventSerializer | None = None,
        clock: Clock | None = None,
        unit_of_work_factory: UnitOfWorkFactory | None = None,
    ) -> None:
        self._store = store
        self._serializer = serializer or JsonEventSerializer()
        self._clock = clock or SystemClock()
        self._uow_factory = unit_of_work_factory

    @property
    def serializer(self) -> EventSerializer:
        return self._serializer

    async def store(
        self, event: Any, listeners: Iterable[ListenerDescriptor | str]
    ) -> list[PublicationRecord]:
        """Persist one pending publication of *event* per listener.

        Storage failures propagate so the enclosing unit of work can roll back.
        """
        serialized = self._serializer.serialize(event)
        event_type = event_type_name(event)
        published_at = self._clock.now()
        records: list[PublicationRecord] = []
        for listener in listeners:
            record = PublicationRecord(
                listener_id=_listener_id(listener),
                serialized_event=serialized,
                event_type=event_type,
                publication_date=published_at,
            )
            await self._guarded(self._store.save(record), "save", record.listener_id)
            logger.debug(
                "publication.registered id=%s event_type=%s listener=%s",
                record.id,
                record.event_type,
                record.listener_id,
            )
            records.append(record)
        logger.info("publication.stored event_type=%s count=%d", event_type, len(records))
        return records

    async def find_incomplete_publications(self) -> list[EventPublication]:
        records = await self._guarded(self._store.find_incomplete(), "find_incomplete")
        return [EventPublication(record, self._serializer) for record in records]

    async def mark_completed(self, event: Any, listener_id: str) -> bool:
        """Complete the pending publication of *event* to *listener_id*.

        Returns ``False`` when no pending publication matches; that is not an
        error (the event was never tracked, or is already completed).
        """
        serialized = self._serializer.serialize(unwrap(event))
        async with self._independent_unit_of_work():
            record = await self._guarded(
                self._store.find_by_serialized_event_and_listener_id(serialized, listener_id),
                "find_by_serialized_event_and_listener_id",
                listener_id,
            )
            if record is None:
                logger.debug(
                    "publication.no_match event_type=%s listener=%s",
                    event_type_name(unwrap(event)),
                    listener_id,
                )
                return False
            return await self._complete_record(record)

    async def complete(self, publication: EventPublication | PublicationRecord) -> bool:
        """Complete a publication already held in hand, bypassing the lookup."""
        record = publication.record if isinstance(publication, EventPublication) else publication
        async with self._independent_unit_of_work():
            return await self._complete_record(record)

    async def shutdown(self) -> list[PublicationRecord]:
        """Log the publications left unfinished; read-only."""
        outstanding = await self._guarded(self._store.find_incomplete(), "find_incomplete")
        if not outstanding:
            logger.debug("publication.shutdown no publications outstanding")
            return outstanding
        logger.info(
            "publication.shutdown %d publication(s) left unfinished", len(outstanding)
        )
        for record in outstanding:
            logger.info(
                "publication.outstanding %s - %s - %s",
                record.id,
                record.event_type,
                record.listener_id,
            )
        return outstanding

    async def _complete_record(self, record: PublicationRecord) -> bool:
        completed_at = self._clock.now()
        if not record.mark_completed(completed_at):
            return False
        changed = await self._guarded(
            self._store.mark_completed(record.id, completed_at), "mark_completed", record.listener_id
        )
        if changed:
            logger.debug(
                "publication.completed id=%s event_type=%s listener=%s",
                record.id,
                record.event_type,
                record.listener_id,
            )
        return changed

    @contextlib.asynccontextmanager
    async def _independent_unit_of_work(self) -> AsyncIterator[None]:
        if self._uow_factory is None:
            with suspended_unit_of_work():
                yield
            return
        with suspended_unit_of_work():
            async with self._uow_factory():
                yield

    @staticmethod
    async def _guarded(awaitable: Any, operation: str, listener_id: str | None = None) -> Any:
        try:
            return await awaitable
        except BaseError:
            raise
        except Exception as exc:
            raise PublicationStoreError(
                f"Publication store '{operation}' failed",
                detail={"operation": operation, "listener_id": listener_id},
                cause=exc,
            ) from exc


__all__ = ["EventPublicationRegistry"]
