"""Testing fakes – InMemoryUnitOfWork."""
from __future__ import annotations

from typing import Callable

from mp_events.kernel.uow import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of work that buffers enlisted writes until commit.

    :class:`~mp_events.testing.fakes.store.InMemoryPublicationStore` enlists
    its writes here while the unit of work is ambient, so a rollback discards
    them.
    """

    def __init__(self) -> None:
        super().__init__()
        self._pending: list[Callable[[], None]] = []
        self.committed = False
        self.rolled_back = False

    def enlist(self, operation: Callable[[], None]) -> None:
        self._pending.append(operation)

    async def commit(self) -> None:
        for operation in self._pending:
            operation()
        self._pending.clear()
        self.committed = True

    async def rollback(self) -> None:
        self._pending.clear()
        self.rolled_back = True


__all__ = ["InMemoryUnitOfWork"]
