"""Application publication – PublicationRuntime (host lifecycle wiring)."""
from __future__ import annotations

from typing import Any

from mp_events.application.publication.dispatcher import DispatchResult, PersistentEventDispatcher
from mp_events.application.publication.error_handlers import CompletionErrorHandler
from mp_events.application.publication.listener import ListenerResolver
from mp_events.application.publication.registry import EventPublicationRegistry
from mp_events.application.publication.replayer import PublicationReplayer, ReplayReport
from mp_events.application.publication.serializers import (
    IdentityEventSerializer,
    JsonEventSerializer,
)
from mp_events.config.settings import PublicationSettings
from mp_events.kernel.publication import EventSerializer, PublicationStore
from mp_events.kernel.time import Clock
from mp_events.kernel.uow import UnitOfWorkFactory
from mp_events.observability.logging import get_logger

log = get_logger(__name__, component="publication-runtime")


def build_serializer(settings: PublicationSettings) -> EventSerializer:
    if settings.serializer == "identity":
        return IdentityEventSerializer()
    return JsonEventSerializer()


class PublicationRuntime:
    """Replay on start, report outstanding publications on stop.

    Usage::

        runtime = PublicationRuntime.create(store, listeners, settings)
        async with runtime:
            ...  # serve traffic; publish through runtime.dispatcher
    """

    def __init__(
        self,
        registry: EventPublicationRegistry,
        dispatcher: PersistentEventDispatcher,
        replayer: PublicationReplayer,
        settings: PublicationSettings | None = None,
    ) -> None:
        self.registry = registry
        self.dispatcher = dispatcher
        self.replayer = replayer
        self.settings = settings or PublicationSettings()
        self.last_replay: ReplayReport | None = None

    @classmethod
    def create(
        cls,
        store: PublicationStore,
        listeners: ListenerResolver,
        settings: PublicationSettings | None = None,
        *,
        serializer: EventSerializer | None = None,
        clock: Clock | None = None,
        unit_of_work_factory: UnitOfWorkFactory | None = None,
        error_handler: CompletionErrorHandler | None = None,
    ) -> "PublicationRuntime":
        settings = settings or PublicationSettings()
        registry = EventPublicationRegistry(
            store,
            serializer=serializer or build_serializer(settings),
            clock=clock,
            unit_of_work_factory=unit_of_work_factory,
        )
        dispatcher = PersistentEventDispatcher(listeners, registry, error_handler=error_handler)
        replayer = PublicationReplayer(
            registry, listeners, dispatcher, concurrency=settings.replay_concurrency
        )
        return cls(registry, dispatcher, replayer, settings)

    async def publish(self, event: Any) -> DispatchResult:
        return await self.dispatcher.publish(event)

    async def start(self) -> None:
        if not self.settings.replay_on_startup:
            log.info("publication.runtime_started", replay="disabled")
            return
        self.last_replay = await self.replayer.replay()
        log.info(
            "publication.runtime_started",
            replayed=len(self.last_replay.replayed),
            skipped=len(self.last_replay.skipped),
            failed=len(self.last_replay.failed),
        )

    async def stop(self) -> None:
        if self.settings.log_outstanding_on_shutdown:
            outstanding = await self.registry.shutdown()
            log.info("publication.runtime_stopped", outstanding=len(outstanding))

    async def __aenter__(self) -> "PublicationRuntime":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.stop()


__all__ = ["PublicationRuntime", "build_serializer"]
