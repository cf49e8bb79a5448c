"""Unit tests for observability logging helpers."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator

import pytest
import structlog

from mp_events.config.settings import PublicationSettings
from mp_events.observability.logging import JsonLoggerFactory, configure_logging, get_logger


@pytest.fixture()
def root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def _render(root: logging.Logger, record: logging.LogRecord) -> str:
    [handler] = root.handlers
    assert handler.formatter is not None
    return handler.formatter.format(record)


def _record(message: str, *args: Any, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("mp_events.test", level, __file__, 1, message, args, None)


class TestJsonLoggerFactory:
    def test_installs_single_root_handler(self, root_logger: logging.Logger) -> None:
        JsonLoggerFactory.configure(level=logging.WARNING)
        assert len(root_logger.handlers) == 1
        assert root_logger.level == logging.WARNING

    def test_stdlib_records_render_as_json(self, root_logger: logging.Logger) -> None:
        JsonLoggerFactory.configure()
        output = _render(root_logger, _record("publication.stored event_type=%s count=%d", "x.Y", 2))
        payload = json.loads(output)
        assert payload["event"] == "publication.stored event_type=x.Y count=2"
        assert payload["level"] == "info"
        assert payload["logger"] == "mp_events.test"
        assert "timestamp" in payload

    def test_console_rendering(self, root_logger: logging.Logger) -> None:
        JsonLoggerFactory.configure(json=False)
        output = _render(root_logger, _record("publication.replay_finished"))
        assert "publication.replay_finished" in output
        with pytest.raises(ValueError):
            json.loads(output)

    def test_configure_from_settings(self, root_logger: logging.Logger) -> None:
        configure_logging(PublicationSettings(log_level="DEBUG", log_json=True))
        assert root_logger.level == logging.DEBUG


class TestGetLogger:
    def test_returns_logger_with_methods(self) -> None:
        log = get_logger(__name__)
        assert hasattr(log, "info")
        assert hasattr(log, "bind")

    def test_binds_initial_values(self) -> None:
        log = get_logger(__name__, component="publication-runtime")
        assert hasattr(log, "info")
