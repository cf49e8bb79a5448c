"""Config settings – PublicationSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from mp_events.config.settings.base import Settings
from mp_events.config.validation import InvalidSettingValueError

SERIALIZERS = ("json", "identity")


@dataclasses.dataclass
class PublicationSettings(Settings):
    """Settings for durable event publication, read from ``EVENTS_*``."""

    _prefix: ClassVar[str] = "EVENTS"

    replay_on_startup: bool = True
    replay_concurrency: int = 1
    log_outstanding_on_shutdown: bool = True
    serializer: str = "json"
    mongo_collection: str = "event_publications"
    log_level: str = "INFO"
    log_json: bool = True

    def _validate(self) -> None:
        if self.replay_concurrency < 1:
            raise InvalidSettingValueError(
                "replay_concurrency", self.replay_concurrency, "must be >= 1"
            )
        if self.serializer not in SERIALIZERS:
            raise InvalidSettingValueError(
                "serializer", self.serializer, f"expected one of {', '.join(SERIALIZERS)}"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")
        if not self.mongo_collection:
            raise InvalidSettingValueError("mongo_collection", self.mongo_collection, "must not be empty")

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["PublicationSettings"]
