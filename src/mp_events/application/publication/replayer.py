"""Application publication – PublicationReplayer."""
from __future__ import annotations

import asyncio
import dataclasses
import logging

from mp_events.application.publication.dispatcher import PersistentEventDispatcher
from mp_events.application.publication.listener import ListenerResolver
from mp_events.application.publication.registry import EventPublicationRegistry
from mp_events.kernel.errors import SerializationError
from mp_events.kernel.publication import EventPublication

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ReplayReport:
    """Publication ids grouped by replay outcome."""

    replayed: list[str] = dataclasses.field(default_factory=list)
    skipped: list[str] = dataclasses.field(default_factory=list)
    failed: list[str] = dataclasses.field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.replayed) + len(self.skipped) + len(self.failed)


class PublicationReplayer:
    """Redeliver publications left incomplete by a previous run.

    Run once, after all listeners are registered and before traffic starts.
    Publications whose listener is no longer registered stay pending.
    Delivery goes through the dispatcher so completion is wired exactly as
    for live events.
    """

    def __init__(
        self,
        registry: EventPublicationRegistry,
        listeners: ListenerResolver,
        dispatcher: PersistentEventDispatcher,
        concurrency: int = 1,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._registry = registry
        self._listeners = listeners
        self._dispatcher = dispatcher
        self._concurrency = concurrency

    async def replay(self) -> ReplayReport:
        report = ReplayReport()
        publications = await self._registry.find_incomplete_publications()
        if not publications:
            logger.debug("publication.replay nothing to replay")
            return report

        semaphore = asyncio.Semaphore(self._concurrency)

        async def _bounded(publication: EventPublication) -> None:
            async with semaphore:
                await self._replay_one(publication, report)

        await asyncio.gather(*(_bounded(p) for p in publications))
        logger.info(
            "publication.replay_finished replayed=%d skipped=%d failed=%d",
            len(report.replayed),
            len(report.skipped),
            len(report.failed),
        )
        return report

    async def _replay_one(self, publication: EventPublication, report: ReplayReport) -> None:
        listener = self._listeners.durable_listener(publication.listener_id)
        if listener is None or not publication.is_identified_by(listener.id):
            logger.debug("publication.replay listener %s not found", publication.listener_id)
            report.skipped.append(publication.id)
            return
        try:
            event = publication.event
        except SerializationError:
            logger.exception(
                "publication.replay_unreadable id=%s event_type=%s",
                publication.id,
                publication.event_type,
            )
            report.failed.append(publication.id)
            return

        logger.debug(
            "publication.replaying id=%s event_type=%s listener=%s",
            publication.id,
            publication.event_type,
            publication.listener_id,
        )
        if await self._dispatcher.deliver(event, listener):
            report.replayed.append(publication.id)
        else:
            report.failed.append(publication.id)


__all__ = ["PublicationReplayer", "ReplayReport"]
