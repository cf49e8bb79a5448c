"""Kernel unit of work – transactional boundary port."""
from mp_events.kernel.uow.unit_of_work import (
    Synchronization,
    UnitOfWork,
    UnitOfWorkFactory,
    current_unit_of_work,
    suspended_unit_of_work,
)

__all__ = [
    "Synchronization",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "current_unit_of_work",
    "suspended_unit_of_work",
]
