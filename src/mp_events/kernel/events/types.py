"""Fully-qualified event type names and their resolution back to classes."""

from __future__ import annotations

import functools
import importlib
from typing import Any

from mp_events.kernel.errors import SerializationError


def event_type_name(obj_or_type: Any) -> str:
    """Return ``module.QualName`` for an event instance or class."""
    cls = obj_or_type if isinstance(obj_or_type, type) else type(obj_or_type)
    return f"{cls.__module__}.{cls.__qualname__}"


@functools.lru_cache(maxsize=512)
def resolve_event_type(name: str) -> type[Any]:
    """Import the class named by :func:`event_type_name`.

    The module/qualname boundary is not encoded in the name, so the longest
    importable module prefix wins.

    Raises:
        SerializationError: the name cannot be resolved to a class.
    """
    if "<locals>" in name:
        raise SerializationError(
            f"Cannot find event class: {name} (defined in a local scope)",
            payload_type=name,
        )
    parts = name.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            target: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        try:
            for attr in parts[split:]:
                target = getattr(target, attr)
        except AttributeError:
            break
        if isinstance(target, type):
            return target
        break
    raise SerializationError(f"Cannot find event class: {name}", payload_type=name)


__all__ = ["event_type_name", "resolve_event_type"]
