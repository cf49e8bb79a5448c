"""Application publication – durable dispatch, registry and replay."""
from mp_events.application.publication.dispatcher import DispatchResult, PersistentEventDispatcher
from mp_events.application.publication.error_handlers import (
    CompletionErrorHandler,
    LoggingErrorHandler,
    RetryingErrorHandler,
)
from mp_events.application.publication.listener import (
    ListenerDescriptor,
    ListenerPhase,
    ListenerRegistry,
    ListenerResolver,
    derive_listener_id,
)
from mp_events.application.publication.registry import EventPublicationRegistry
from mp_events.application.publication.replayer import PublicationReplayer, ReplayReport
from mp_events.application.publication.runtime import PublicationRuntime, build_serializer
from mp_events.application.publication.serializers import (
    IdentityEventSerializer,
    JsonEventSerializer,
)

__all__ = [
    "CompletionErrorHandler",
    "DispatchResult",
    "EventPublicationRegistry",
    "IdentityEventSerializer",
    "JsonEventSerializer",
    "ListenerDescriptor",
    "ListenerPhase",
    "ListenerRegistry",
    "ListenerResolver",
    "LoggingErrorHandler",
    "PersistentEventDispatcher",
    "PublicationReplayer",
    "PublicationRuntime",
    "ReplayReport",
    "RetryingErrorHandler",
    "build_serializer",
    "derive_listener_id",
]
