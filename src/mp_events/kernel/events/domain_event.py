"""Domain events and the payload envelope."""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar
from uuid import uuid4

T = TypeVar("T")


@dataclasses.dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base class for domain events.

    Subclasses should extend this and add their own payload fields.

    Example::

        @dataclasses.dataclass(frozen=True)
        class OrderPlaced(DomainEvent):
            order_id: str
    """

    event_id: str = dataclasses.field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = dataclasses.field(
        default_factory=lambda: datetime.now(UTC)
    )

    @property
    def event_type(self) -> str:
        return type(self).__name__


@dataclasses.dataclass(frozen=True)
class PayloadEvent(Generic[T]):
    """Envelope carrying an arbitrary payload object.

    Anything published that is not a :class:`DomainEvent` travels inside a
    ``PayloadEvent``.  Listener matching and persistence look through the
    envelope at ``payload``.
    """

    payload: T


def is_event(obj: Any) -> bool:
    """Return ``True`` when *obj* can be dispatched without wrapping."""
    return isinstance(obj, (DomainEvent, PayloadEvent))


def unwrap(event: Any) -> Any:
    """Return the payload of an envelope, or *event* itself."""
    return event.payload if isinstance(event, PayloadEvent) else event


__all__ = ["DomainEvent", "PayloadEvent", "is_event", "unwrap"]
