"""Unit tests for lyricloop logging setup."""

import logging

import structlog

from lyricloop.config import LoggingSettings
from lyricloop.logging import _resolve_level, configure_logging, get_logger, learner_context


class TestLogging:
    """Tests for logging configuration helpers."""

    def test_resolve_level(self) -> None:
        assert _resolve_level("warning") == logging.WARNING
        assert _resolve_level(logging.DEBUG) == logging.DEBUG
        assert _resolve_level("chatty") == logging.INFO

    def test_learner_context_is_scoped(self) -> None:
        with learner_context("learner-1"):
            assert structlog.contextvars.get_contextvars()["owner_id"] == "learner-1"

        assert "owner_id" not in structlog.contextvars.get_contextvars()

    def test_configure_json_output(self) -> None:
        try:
            configure_logging(LoggingSettings(level="DEBUG", json_output=True))
            get_logger("lyricloop.test").debug("json_configured", value=1)
        finally:
            configure_logging(LoggingSettings())
