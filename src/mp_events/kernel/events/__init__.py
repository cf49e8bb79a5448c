"""Kernel events – domain events, payload envelope and type names."""
from mp_events.kernel.events.domain_event import DomainEvent, PayloadEvent, is_event, unwrap
from mp_events.kernel.events.types import event_type_name, resolve_event_type

__all__ = [
    "DomainEvent",
    "PayloadEvent",
    "event_type_name",
    "is_event",
    "resolve_event_type",
    "unwrap",
]
