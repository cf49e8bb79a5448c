"""Application-layer errors — listener wiring and invocation."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from mp_events.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnresolvedListenerTypeError(ApplicationError):
    """A stable listener id cannot be derived for the given object.

    Signals a configuration error: register the listener with an explicit id.
    """

    default_code = "unresolved_listener_type"

    def __init__(self, listener: Any, reason: str) -> None:
        super().__init__(
            f"Cannot derive a listener id for {listener!r}: {reason}",
            detail={"listener": repr(listener)},
        )
        self.listener = listener


class DuplicateListenerError(ApplicationError):
    """Two listeners were registered under the same id."""

    default_code = "duplicate_listener"

    def __init__(self, listener_id: str) -> None:
        super().__init__(
            f"Listener '{listener_id}' is already registered",
            detail={"listener_id": listener_id},
        )
        self.listener_id = listener_id


class ListenerInvocationError(ApplicationError):
    """A listener raised while handling an event.

    ``retry`` re-runs the failed invocation including its completion step;
    error handlers that implement a retry policy call it.
    """

    default_code = "listener_invocation_failed"

    def __init__(
        self,
        listener_id: str,
        event: Any,
        *,
        cause: BaseException,
        retry: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        super().__init__(
            f"Listener '{listener_id}' failed handling {type(event).__name__}",
            detail={"listener_id": listener_id, "event_type": type(event).__name__},
            cause=cause,
        )
        self.listener_id = listener_id
        self.event = event
        self.retry = retry


__all__ = [
    "ApplicationError",
    "DuplicateListenerError",
    "ListenerInvocationError",
    "UnresolvedListenerTypeError",
]
