"""Testing fakes – in-memory doubles for kernel ports."""
from mp_events.testing.fakes.clock import FakeClock
from mp_events.testing.fakes.store import InMemoryPublicationStore
from mp_events.testing.fakes.uow import InMemoryUnitOfWork
from mp_events.kernel.time import FrozenClock

__all__ = [
    "FakeClock",
    "FrozenClock",
    "InMemoryPublicationStore",
    "InMemoryUnitOfWork",
]
