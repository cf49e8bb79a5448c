"""SQLAlchemy adapter – SqlAlchemyUnitOfWork."""
from __future__ import annotations

from typing import Any, Callable

from mp_events.kernel.uow import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy async unit of work.

    While ambient, :class:`SqlAlchemyPublicationStore` writes through
    :attr:`session`, so publication intents commit or roll back with the
    business data.
    """

    def __init__(self, session_factory: Callable[[], Any]) -> None:
        super().__init__()
        self._factory = session_factory
        self.session: Any = None

    async def begin(self) -> None:
        self.session = self._factory()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    async def close(self) -> None:
        if self.session is not None:
            await self.session.close()


__all__ = ["SqlAlchemyUnitOfWork"]
