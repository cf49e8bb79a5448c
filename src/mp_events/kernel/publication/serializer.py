"""Kernel publication – EventSerializer port."""
from __future__ import annotations

import abc
from typing import Any


class EventSerializer(abc.ABC):
    """Port: convert an event payload to and from its storable form.

    ``serialize`` must be deterministic: value-equal events produce
    storage-equal output, because completion looks records up by the
    serialized value.
    """

    @abc.abstractmethod
    def serialize(self, event: Any) -> Any: ...

    @abc.abstractmethod
    def deserialize(self, serialized: Any, expected_type: type[Any]) -> Any:
        """Rebuild the event; raise ``SerializationMismatchError`` on type mismatch."""
        ...


__all__ = ["EventSerializer"]
