"""MongoDB adapter — MongoDocumentEventSerializer."""

from __future__ import annotations

from typing import Any

from mp_events.application.publication.serializers import JsonEventSerializer


def _sorted(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sorted(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sorted(item) for item in value]
    return value


class MongoDocumentEventSerializer(JsonEventSerializer):
    """Store events as embedded documents with a ``_class`` discriminator.

    MongoDB compares embedded documents field by field *and in order*, so
    keys are sorted recursively; the natural-key lookup in
    :meth:`MongoPublicationStore.find_by_serialized_event_and_listener_id`
    then matches exactly, discriminator included.
    """

    TYPE_KEY = "_class"

    def serialize(self, event: Any) -> dict[str, Any]:
        return _sorted(self.to_document(event))

    def deserialize(self, serialized: Any, expected_type: type[Any]) -> Any:
        return self.from_document(serialized, expected_type)


__all__ = ["MongoDocumentEventSerializer"]
