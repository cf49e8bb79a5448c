"""Kernel publication – PublicationRecord and the EventPublication view."""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from mp_events.kernel.errors import InvariantViolationError
from mp_events.kernel.events import resolve_event_type

if TYPE_CHECKING:
    from mp_events.kernel.publication.serializer import EventSerializer


@dataclasses.dataclass
class PublicationRecord:
    """Intent to deliver one event to one listener.

    ``completion_date`` is ``None`` while the publication is pending.
    """

    listener_id: str
    serialized_event: Any
    event_type: str
    id: str = dataclasses.field(default_factory=lambda: str(uuid4()))
    publication_date: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))
    completion_date: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.completion_date is not None

    def mark_completed(self, at: datetime) -> bool:
        """Set ``completion_date`` once.

        Returns ``False`` (leaving the first value) when already completed.
        """
        if self.completion_date is not None:
            return False
        if at < self.publication_date:
            raise InvariantViolationError(
                "Completion date precedes publication date",
                detail={
                    "id": self.id,
                    "publication_date": self.publication_date.isoformat(),
                    "completion_date": at.isoformat(),
                },
            )
        self.completion_date = at
        return True


class EventPublication:
    """A stored publication paired with its (lazily) deserialized event.

    Deserialization happens on first access to :attr:`event`; a failure
    surfaces there and only affects this publication.
    """

    _UNSET: Any = object()

    def __init__(self, record: PublicationRecord, serializer: EventSerializer) -> None:
        self._record = record
        self._serializer = serializer
        self._event: Any = self._UNSET

    @property
    def record(self) -> PublicationRecord:
        return self._record

    @property
    def id(self) -> str:
        return self._record.id

    @property
    def listener_id(self) -> str:
        return self._record.listener_id

    @property
    def event_type(self) -> str:
        return self._record.event_type

    @property
    def publication_date(self) -> datetime:
        return self._record.publication_date

    @property
    def completion_date(self) -> datetime | None:
        return self._record.completion_date

    @property
    def is_completed(self) -> bool:
        return self._record.is_completed

    @property
    def event(self) -> Any:
        if self._event is self._UNSET:
            expected = resolve_event_type(self._record.event_type)
            self._event = self._serializer.deserialize(self._record.serialized_event, expected)
        return self._event

    def is_identified_by(self, listener_id: str) -> bool:
        return self._record.listener_id == listener_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventPublication):
            return NotImplemented
        return self._record.id == other._record.id

    def __hash__(self) -> int:
        return hash(self._record.id)

    def __repr__(self) -> str:
        return (
            f"EventPublication(id={self.id!r}, event_type={self.event_type!r}, "
            f"listener_id={self.listener_id!r})"
        )


__all__ = ["EventPublication", "PublicationRecord"]
