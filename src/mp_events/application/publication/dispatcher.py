"""Application publication – PersistentEventDispatcher.

Every published event goes through :meth:`PersistentEventDispatcher.publish`:

1. listeners are resolved through the :class:`ListenerResolver`;
2. durable listeners whose declared types really accept the event get one
   pending publication each, stored before anything is invoked;
3. every resolved listener is invoked in registration order;
4. durable deliveries report completion to the registry once their work has
   committed, or hand the failure to the configured error handler (after
   the ambient unit of work commits, when there is one).

Resolution may be coarse (a listener's ``accepts`` predicate can claim
events it does not declare).  Such listeners are still invoked, but never
tracked: persisting unrelated events would replay them spuriously, and
records that raise events of their own when saved would track themselves
recursively.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any

from mp_events.application.publication.error_handlers import (
    CompletionErrorHandler,
    LoggingErrorHandler,
    call_error_handler,
)
from mp_events.application.publication.listener import (
    ListenerDescriptor,
    ListenerPhase,
    ListenerResolver,
)
from mp_events.application.publication.registry import EventPublicationRegistry
from mp_events.kernel.errors import ListenerInvocationError
from mp_events.kernel.events import PayloadEvent, is_event, unwrap
from mp_events.kernel.uow import current_unit_of_work

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class DispatchResult:
    """What happened to one published event, by listener id."""

    event: Any
    stored: list[str] = dataclasses.field(default_factory=list)
    invoked: list[str] = dataclasses.field(default_factory=list)
    deferred: list[str] = dataclasses.field(default_factory=list)
    failed: list[str] = dataclasses.field(default_factory=list)


class PersistentEventDispatcher:
    """Dispatch events to listeners, tracking durable deliveries.

    Safe for concurrent use from independent tasks; it keeps no per-event
    state beyond the call.
    """

    def __init__(
        self,
        listeners: ListenerResolver,
        registry: EventPublicationRegistry,
        error_handler: CompletionErrorHandler | None = None,
    ) -> None:
        self._listeners = listeners
        self._registry = registry
        self._error_handler: CompletionErrorHandler = error_handler or LoggingErrorHandler()

    async def publish(self, event: Any) -> DispatchResult:
        """Publish *event*; objects that are not events travel in a :class:`PayloadEvent`.

        Raises whatever the registry raises while storing publications, so the
        caller's unit of work fails together with the tracking failure.
        """
        if not is_event(event):
            event = PayloadEvent(event)
        result = DispatchResult(event=event)

        listeners = self._listeners.resolve(event)
        if not listeners:
            return result

        tracked = [l for l in listeners if l.durable and l.declares(event)]
        if tracked:
            await self._registry.store(unwrap(event), tracked)
            result.stored.extend(l.id for l in tracked)
        tracked_ids = set(result.stored)

        for listener in listeners:
            if listener.id in tracked_ids:
                outcome = await self._deliver(event, listener)
                getattr(result, outcome).append(listener.id)
            elif await self._invoke_untracked(event, listener):
                result.invoked.append(listener.id)
            else:
                result.failed.append(listener.id)
        return result

    async def deliver(self, event: Any, listener: ListenerDescriptor) -> bool:
        """Deliver a tracked publication to a durable listener.

        Used for live dispatch and replay alike.  Returns ``False`` when the
        listener failed synchronously.
        """
        if not is_event(event):
            event = PayloadEvent(event)
        return await self._deliver(event, listener) != "failed"

    async def _deliver(self, event: Any, listener: ListenerDescriptor) -> str:
        uow = current_unit_of_work()

        if listener.phase is ListenerPhase.AFTER_COMMIT:
            async def run_after_commit() -> bool:
                if not await self._invoke_tracked(event, listener):
                    return False
                await self._signal_completion(event, listener)
                return True

            if uow is None:
                return "invoked" if await run_after_commit() else "failed"
            uow.after_commit(run_after_commit)
            uow.after_rollback(lambda: self._discarded(event, listener))
            return "deferred"

        if not await self._invoke_tracked(event, listener):
            return "failed"
        if uow is None:
            await self._signal_completion(event, listener)
        else:
            uow.after_commit(lambda: self._signal_completion(event, listener))
            uow.after_rollback(lambda: self._discarded(event, listener))
        return "invoked"

    async def _invoke_untracked(self, event: Any, listener: ListenerDescriptor) -> bool:
        try:
            await listener.invoke(event)
        except Exception:
            logger.exception(
                "publication.listener_failed listener=%s event_type=%s tracked=false",
                listener.id,
                type(unwrap(event)).__name__,
            )
            return False
        return True

    async def _invoke_tracked(self, event: Any, listener: ListenerDescriptor) -> bool:
        try:
            await listener.invoke(event)
        except Exception as exc:
            logger.warning(
                "publication.listener_failed listener=%s event_type=%s tracked=true",
                listener.id,
                type(unwrap(event)).__name__,
                exc_info=exc,
            )
            error = ListenerInvocationError(
                listener.id, event, cause=exc, retry=lambda: self._attempt(event, listener)
            )
            uow = current_unit_of_work()
            if uow is None:
                await call_error_handler(self._error_handler, event, error)
            else:
                # The pending record only becomes visible on commit; a retry's
                # completion must not look it up before then.
                uow.after_commit(lambda: call_error_handler(self._error_handler, event, error))
            return False
        return True

    async def _signal_completion(self, event: Any, listener: ListenerDescriptor) -> None:
        try:
            await self._registry.mark_completed(event, listener.id)
        except Exception as exc:
            logger.exception(
                "publication.completion_failed listener=%s event_type=%s",
                listener.id,
                type(unwrap(event)).__name__,
            )
            await call_error_handler(self._error_handler, event, exc)

    async def _attempt(self, event: Any, listener: ListenerDescriptor) -> None:
        await listener.invoke(event)
        await self._registry.mark_completed(event, listener.id)

    @staticmethod
    async def _discarded(event: Any, listener: ListenerDescriptor) -> None:
        logger.debug(
            "publication.discarded listener=%s event_type=%s reason=rollback",
            listener.id,
            type(unwrap(event)).__name__,
        )


__all__ = ["DispatchResult", "PersistentEventDispatcher"]
