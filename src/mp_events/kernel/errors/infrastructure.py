"""Infrastructure errors — storage and serialization failures."""

from __future__ import annotations

from typing import Any

from mp_events.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize an event payload."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class SerializationMismatchError(SerializationError):
    """The stored form cannot be viewed as the requested type."""

    default_code = "serialization_mismatch"

    def __init__(self, expected: str, actual: str, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid serialized event type: {actual} (expecting: {expected})",
            payload_type=expected,
            detail={"expected": expected, "actual": actual},
            **kwargs,
        )
        self.expected = expected
        self.actual = actual


class PublicationStoreError(InfrastructureError):
    """The publication store failed to persist or update a record."""

    default_code = "publication_store_error"


__all__ = [
    "InfrastructureError",
    "PublicationStoreError",
    "SerializationError",
    "SerializationMismatchError",
]
