"""MongoDB adapter — MongoUnitOfWork."""

from __future__ import annotations

from typing import Any

from mp_events.kernel.uow import UnitOfWork


class MongoUnitOfWork(UnitOfWork):
    """Unit of work backed by a **motor** client session.

    Requires a MongoDB replica set (or a transaction-capable topology) to
    support multi-document ACID transactions.  While the unit of work is
    ambient, :class:`MongoPublicationStore` issues its operations on
    :attr:`session`.

    Usage::

        async with MongoUnitOfWork(motor_client):
            await dispatcher.publish(OrderPlaced(order_id="o-1"))
    """

    def __init__(self, client: Any) -> None:
        super().__init__()
        self._client = client
        self.session: Any = None

    async def begin(self) -> None:
        self.session = await self._client.start_session()
        self.session.start_transaction()

    async def commit(self) -> None:
        """Commit the active MongoDB transaction."""
        await self.session.commit_transaction()

    async def rollback(self) -> None:
        """Abort the active MongoDB transaction."""
        await self.session.abort_transaction()

    async def close(self) -> None:
        if self.session is not None:
            await self.session.end_session()


__all__ = ["MongoUnitOfWork"]
