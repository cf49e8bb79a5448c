"""Kernel publication – PublicationStore port."""
from __future__ import annotations

import abc
from datetime import datetime
from typing import Any

from mp_events.kernel.publication.record import PublicationRecord


class PublicationStore(abc.ABC):
    """Port: durable persistence for publication records.

    Implementations must support concurrent appends and concurrent updates of
    distinct records.  :meth:`mark_completed` is a conditional update that
    only touches a record whose ``completion_date`` is still ``None``.
    """

    @abc.abstractmethod
    async def save(self, record: PublicationRecord) -> None: ...

    @abc.abstractmethod
    async def find_incomplete(self) -> list[PublicationRecord]:
        """Return every record with ``completion_date`` unset."""
        ...

    @abc.abstractmethod
    async def find_by_serialized_event_and_listener_id(
        self, serialized_event: Any, listener_id: str
    ) -> PublicationRecord | None:
        """Exact natural-key lookup among incomplete records."""
        ...

    @abc.abstractmethod
    async def mark_completed(self, record_id: str, completion_date: datetime) -> bool:
        """Set ``completion_date`` if unset; ``False`` when nothing changed."""
        ...


__all__ = ["PublicationStore"]
