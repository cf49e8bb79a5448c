"""Kernel – framework-agnostic building blocks."""

from mp_events.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    DuplicateListenerError,
    InfrastructureError,
    InvariantViolationError,
    ListenerInvocationError,
    PublicationStoreError,
    SerializationError,
    SerializationMismatchError,
    UnresolvedListenerTypeError,
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
