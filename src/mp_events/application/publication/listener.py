"""Application publication – ListenerDescriptor and ListenerRegistry.

A listener is described explicitly at registration time: its stable id, the
event types it declares, and whether its deliveries must be tracked.  Nothing
is discovered by inspecting the handler.
"""
from __future__ import annotations

import dataclasses
import functools
import inspect
import typing
from enum import Enum
from typing import Any, Callable, Iterator, Protocol, Sequence, TypeVar

from mp_events.kernel.errors import DuplicateListenerError, UnresolvedListenerTypeError
from mp_events.kernel.events import PayloadEvent

F = TypeVar("F", bound=Callable[..., Any])

#: Sync or async callable receiving the event (or the payload of an envelope).
Handler = Callable[[Any], Any]


class ListenerPhase(str, Enum):
    """When a durable listener's handler runs relative to the ambient unit of work."""

    IMMEDIATE = "IMMEDIATE"
    AFTER_COMMIT = "AFTER_COMMIT"


def _envelope_argument(declared: Any) -> Any | None:
    """Return ``X`` for a declared ``PayloadEvent[X]``, else ``None``."""
    if typing.get_origin(declared) is PayloadEvent:
        args = typing.get_args(declared)
        return args[0] if args else None
    return None


def _matches_directly(declared: Any, event: Any) -> bool:
    payload_arg = _envelope_argument(declared)
    if payload_arg is not None:
        return (
            isinstance(event, PayloadEvent)
            and isinstance(payload_arg, type)
            and isinstance(event.payload, payload_arg)
        )
    return isinstance(declared, type) and isinstance(event, declared)


@dataclasses.dataclass(frozen=True)
class ListenerDescriptor:
    """Explicit capability contract for one listener.

    ``declared_event_types`` holds classes and/or ``PayloadEvent[X]``
    parametrisations.  ``accepts`` overrides coarse resolution; when omitted
    the listener is resolved for exactly the events it declares.
    """

    id: str
    handler: Handler
    declared_event_types: tuple[Any, ...]
    durable: bool = False
    phase: ListenerPhase = ListenerPhase.AFTER_COMMIT
    accepts: Callable[[Any], bool] | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Listener id must not be empty")
        object.__setattr__(self, "declared_event_types", tuple(self.declared_event_types))

    @classmethod
    def for_callable(
        cls,
        handler: Handler,
        event_types: Sequence[Any],
        *,
        durable: bool = False,
        phase: ListenerPhase = ListenerPhase.AFTER_COMMIT,
        listener_id: str | None = None,
        accepts: Callable[[Any], bool] | None = None,
    ) -> "ListenerDescriptor":
        return cls(
            id=listener_id or derive_listener_id(handler),
            handler=handler,
            declared_event_types=tuple(event_types),
            durable=durable,
            phase=phase,
            accepts=accepts,
        )

    def declares(self, event: Any) -> bool:
        """Whether the declared types really accept *event*.

        A direct match on the event's own class wins; only then is an envelope
        looked through and its payload matched against plain declared classes.
        """
        if any(_matches_directly(d, event) for d in self.declared_event_types):
            return True
        if isinstance(event, PayloadEvent):
            return any(
                isinstance(d, type) and isinstance(event.payload, d)
                for d in self.declared_event_types
            )
        return False

    def supports(self, event: Any) -> bool:
        if self.accepts is not None:
            return self.accepts(event)
        return self.declares(event)

    def argument_for(self, event: Any) -> Any:
        """The object handed to the handler: the payload unless the envelope is declared."""
        if isinstance(event, PayloadEvent) and not any(
            _matches_directly(d, event) for d in self.declared_event_types
        ):
            return event.payload
        return event

    async def invoke(self, event: Any) -> None:
        result = self.handler(self.argument_for(event))
        if inspect.isawaitable(result):
            await result


def derive_listener_id(handler: Any) -> str:
    """Stable id ``module.QualName`` for a module-level function or method.

    Raises:
        UnresolvedListenerTypeError: the handler has no stable qualified name
            (lambda, nested function, partial, callable instance).
    """
    if isinstance(handler, functools.partial):
        raise UnresolvedListenerTypeError(handler, "functools.partial has no qualified name")
    qualname = getattr(handler, "__qualname__", None)
    module = getattr(handler, "__module__", None)
    if not qualname or not module:
        raise UnresolvedListenerTypeError(handler, "object has no qualified name")
    if "<lambda>" in qualname or "<locals>" in qualname:
        raise UnresolvedListenerTypeError(handler, f"'{qualname}' is not addressable")
    return f"{module}.{qualname}"


class ListenerResolver(Protocol):
    """Port: resolve the ordered listeners interested in an event."""

    def resolve(self, event: Any) -> list[ListenerDescriptor]: ...

    def durable_listener(self, listener_id: str) -> ListenerDescriptor | None: ...


class ListenerRegistry:
    """In-process listener registry keeping registration order.

    Durable listeners are indexed by id once, at registration.

    Example::

        listeners = ListenerRegistry()

        @listeners.listener(OrderPlaced, durable=True)
        async def send_confirmation(event: OrderPlaced) -> None: ...
    """

    def __init__(self) -> None:
        self._listeners: list[ListenerDescriptor] = []
        self._ids: set[str] = set()
        self._durable: dict[str, ListenerDescriptor] = {}

    def register(self, descriptor: ListenerDescriptor) -> ListenerDescriptor:
        if descriptor.id in self._ids:
            raise DuplicateListenerError(descriptor.id)
        self._listeners.append(descriptor)
        self._ids.add(descriptor.id)
        if descriptor.durable:
            self._durable[descriptor.id] = descriptor
        return descriptor

    def listener(
        self,
        *event_types: Any,
        durable: bool = False,
        phase: ListenerPhase = ListenerPhase.AFTER_COMMIT,
        listener_id: str | None = None,
    ) -> Callable[[F], F]:
        """Decorator: register the decorated function as a listener."""

        def decorator(func: F) -> F:
            self.register(
                ListenerDescriptor.for_callable(
                    func, event_types, durable=durable, phase=phase, listener_id=listener_id
                )
            )
            return func

        return decorator

    def resolve(self, event: Any) -> list[ListenerDescriptor]:
        return [d for d in self._listeners if d.supports(event)]

    def durable_listener(self, listener_id: str) -> ListenerDescriptor | None:
        return self._durable.get(listener_id)

    def __iter__(self) -> Iterator[ListenerDescriptor]:
        return iter(list(self._listeners))

    def __len__(self) -> int:
        return len(self._listeners)


__all__ = [
    "Handler",
    "ListenerDescriptor",
    "ListenerPhase",
    "ListenerRegistry",
    "ListenerResolver",
    "derive_listener_id",
]
