"""Application publication – handlers for failed durable deliveries.

The dispatcher hands every failed durable delivery to a
:class:`CompletionErrorHandler`.  The default only logs; the publication
stays pending and is picked up by the next replay.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Protocol

import tenacity

from mp_events.kernel.errors import ListenerInvocationError
from mp_events.kernel.events import unwrap

logger = logging.getLogger(__name__)


class CompletionErrorHandler(Protocol):
    """Port: react to a durable listener whose work ultimately failed."""

    def __call__(self, event: Any, error: BaseException) -> Awaitable[None] | None: ...


async def call_error_handler(handler: CompletionErrorHandler, event: Any, error: BaseException) -> None:
    """Invoke *handler* (sync or async); its own failures are logged, never raised."""
    try:
        result = handler(event, error)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception("publication.error_handler_failed handler=%r", handler)


class LoggingErrorHandler:
    """Log the failure and do nothing else."""

    def __call__(self, event: Any, error: BaseException) -> None:
        listener_id = getattr(error, "listener_id", None)
        logger.error(
            "publication.listener_failed listener=%s event_type=%s error=%r",
            listener_id,
            type(unwrap(event)).__name__,
            error.__cause__ or error,
        )


class RetryingErrorHandler:
    """Retry the failed delivery with ``tenacity`` before giving up.

    Only :class:`ListenerInvocationError` instances carrying a ``retry``
    callable are retried.  When attempts are exhausted (or the error is not
    retryable) the *fallback* handler receives the last error.

    Example::

        dispatcher = PersistentEventDispatcher(
            listeners,
            registry,
            error_handler=RetryingErrorHandler(
                max_attempts=5, wait=tenacity.wait_exponential(multiplier=0.2, max=5)
            ),
        )
    """

    def __init__(
        self,
        max_attempts: int = 3,
        wait: Any = None,
        fallback: CompletionErrorHandler | None = None,
    ) -> None:
        self._max_attempts = max_attempts
        self._wait = wait or tenacity.wait_fixed(0)
        self._fallback: CompletionErrorHandler = fallback or LoggingErrorHandler()

    async def __call__(self, event: Any, error: BaseException) -> None:
        if not isinstance(error, ListenerInvocationError) or error.retry is None:
            await call_error_handler(self._fallback, event, error)
            return
        try:
            async for attempt in tenacity.AsyncRetrying(
                stop=tenacity.stop_after_attempt(self._max_attempts),
                wait=self._wait,
                reraise=True,
            ):
                with attempt:
                    await error.retry()
        except Exception as exc:
            await call_error_handler(
                self._fallback,
                event,
                ListenerInvocationError(error.listener_id, error.event, cause=exc),
            )
        else:
            logger.info("publication.retry_succeeded listener=%s", error.listener_id)


__all__ = [
    "CompletionErrorHandler",
    "LoggingErrorHandler",
    "RetryingErrorHandler",
    "call_error_handler",
]
