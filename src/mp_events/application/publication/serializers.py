"""Application publication – EventSerializer implementations."""
from __future__ import annotations

import functools
import json
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from mp_events.kernel.errors import SerializationError, SerializationMismatchError
from mp_events.kernel.events import event_type_name, resolve_event_type
from mp_events.kernel.publication import EventSerializer


class IdentityEventSerializer(EventSerializer):
    """Store the event object as-is; validate its type on read.

    Suitable when the store keeps Python objects (in-memory) or encodes
    structured values itself.
    """

    def serialize(self, event: Any) -> Any:
        return event

    def deserialize(self, serialized: Any, expected_type: type[Any]) -> Any:
        if not isinstance(serialized, expected_type):
            raise SerializationMismatchError(
                expected=event_type_name(expected_type),
                actual=event_type_name(serialized),
            )
        return serialized


@functools.lru_cache(maxsize=256)
def _adapter(cls: type[Any]) -> TypeAdapter[Any]:
    return TypeAdapter(cls)


class JsonEventSerializer(EventSerializer):
    """Canonical JSON serializer backed by :class:`pydantic.TypeAdapter`.

    Output is ``{"_type": "<module.QualName>", "data": {...}}`` rendered with
    sorted keys and compact separators, so value-equal events always produce
    identical strings.  Dataclasses, pydantic models and JSON primitives are
    supported.
    """

    TYPE_KEY = "_type"
    DATA_KEY = "data"

    def serialize(self, event: Any) -> Any:
        return json.dumps(
            self.to_document(event), sort_keys=True, separators=(",", ":"), ensure_ascii=False
        )

    def deserialize(self, serialized: Any, expected_type: type[Any]) -> Any:
        expected = event_type_name(expected_type)
        if not isinstance(serialized, (str, bytes)):
            raise SerializationMismatchError(expected=expected, actual=event_type_name(serialized))
        try:
            document = json.loads(serialized)
        except ValueError as exc:
            raise SerializationError(
                "Stored event is not valid JSON", payload_type=expected, cause=exc
            ) from exc
        return self.from_document(document, expected_type)

    def to_document(self, event: Any) -> dict[str, Any]:
        try:
            data = _adapter(type(event)).dump_python(event, mode="json")
        except Exception as exc:
            raise SerializationError(
                f"Cannot serialize {type(event).__name__}",
                payload_type=event_type_name(event),
                cause=exc,
            ) from exc
        return {self.TYPE_KEY: event_type_name(event), self.DATA_KEY: data}

    def from_document(self, document: Any, expected_type: type[Any]) -> Any:
        expected = event_type_name(expected_type)
        if not isinstance(document, dict) or self.DATA_KEY not in document:
            raise SerializationMismatchError(expected=expected, actual="<untyped>")

        stored_name = document.get(self.TYPE_KEY, expected)
        target = expected_type
        if stored_name != expected:
            target = resolve_event_type(stored_name)
            if not issubclass(target, expected_type):
                raise SerializationMismatchError(expected=expected, actual=stored_name)
        try:
            return _adapter(target).validate_python(document[self.DATA_KEY])
        except PydanticValidationError as exc:
            raise SerializationMismatchError(expected=expected, actual=stored_name, cause=exc) from exc


__all__ = ["IdentityEventSerializer", "JsonEventSerializer"]
