"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                  (domain.py)
    │   └── InvariantViolationError
    ├── ApplicationError             (application.py)
    │   ├── UnresolvedListenerTypeError
    │   ├── DuplicateListenerError
    │   └── ListenerInvocationError
    └── InfrastructureError          (infrastructure.py)
        ├── SerializationError
        │   └── SerializationMismatchError
        └── PublicationStoreError
"""

from mp_events.kernel.errors.application import (
    ApplicationError,
    DuplicateListenerError,
    ListenerInvocationError,
    UnresolvedListenerTypeError,
)
from mp_events.kernel.errors.base import BaseError
from mp_events.kernel.errors.domain import DomainError, InvariantViolationError
from mp_events.kernel.errors.infrastructure import (
    InfrastructureError,
    PublicationStoreError,
    SerializationError,
    SerializationMismatchError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "DuplicateListenerError",
    "InfrastructureError",
    "InvariantViolationError",
    "ListenerInvocationError",
    "PublicationStoreError",
    "SerializationError",
    "SerializationMismatchError",
    "UnresolvedListenerTypeError",
]
