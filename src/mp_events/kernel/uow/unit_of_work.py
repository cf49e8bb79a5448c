"""Unit of Work port — transactional boundary with completion synchronizations."""

from __future__ import annotations

import abc
import contextlib
import contextvars
import logging
from typing import Any, Awaitable, Callable, Iterator

logger = logging.getLogger(__name__)

#: Callback run once the unit of work has finished.
Synchronization = Callable[[], Awaitable[None]]

_current: contextvars.ContextVar["UnitOfWork | None"] = contextvars.ContextVar(
    "mp_events_unit_of_work", default=None
)


def current_unit_of_work() -> "UnitOfWork | None":
    """Return the unit of work bound to the running task, if any."""
    return _current.get()


@contextlib.contextmanager
def suspended_unit_of_work() -> Iterator[None]:
    """Run the block with no ambient unit of work (writes are not enlisted)."""
    token = _current.set(None)
    try:
        yield
    finally:
        _current.reset(token)


class UnitOfWork(abc.ABC):
    """Port: transactional unit of work.

    Entering binds the instance as the ambient unit of work for the current
    task; a nested ``async with`` on another instance shadows it (independent
    transaction) and restores it on exit.  Callbacks registered through
    :meth:`after_commit` / :meth:`after_rollback` run after the outcome is
    settled and the unit of work is no longer ambient.
    """

    def __init__(self) -> None:
        self._after_commit: list[Synchronization] = []
        self._after_rollback: list[Synchronization] = []
        self._token: contextvars.Token[UnitOfWork | None] | None = None

    @abc.abstractmethod
    async def commit(self) -> None: ...

    @abc.abstractmethod
    async def rollback(self) -> None: ...

    async def begin(self) -> None:
        """Hook: open the underlying transaction."""

    async def close(self) -> None:
        """Hook: release underlying resources."""

    @property
    def is_active(self) -> bool:
        return self._token is not None

    def after_commit(self, callback: Synchronization) -> None:
        self._after_commit.append(callback)

    def after_rollback(self, callback: Synchronization) -> None:
        self._after_rollback.append(callback)

    async def __aenter__(self) -> "UnitOfWork":
        await self.begin()
        self._token = _current.set(self)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        committed = False
        try:
            if exc_type is None:
                try:
                    await self.commit()
                    committed = True
                except BaseException:
                    await self.rollback()
                    raise
            else:
                await self.rollback()
        finally:
            if self._token is not None:
                _current.reset(self._token)
                self._token = None
            await self.close()
            callbacks = self._after_commit if committed else self._after_rollback
            self._after_commit, self._after_rollback = [], []
            await _run_synchronizations(callbacks, "commit" if committed else "rollback")


async def _run_synchronizations(callbacks: list[Synchronization], outcome: str) -> None:
    for callback in callbacks:
        try:
            await callback()
        except Exception:
            logger.exception("uow.synchronization_failed outcome=%s callback=%r", outcome, callback)


#: Factory returning a fresh, independent unit of work.
UnitOfWorkFactory = Callable[[], UnitOfWork]


__all__ = [
    "Synchronization",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "current_unit_of_work",
    "suspended_unit_of_work",
]
