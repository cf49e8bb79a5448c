"""Domain errors — publication state invariants."""

from __future__ import annotations

from mp_events.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule / invariant is violated."""

    default_code = "domain_error"


class InvariantViolationError(DomainError):
    """A publication record invariant was violated."""

    default_code = "invariant_violation"


__all__ = ["DomainError", "InvariantViolationError"]
