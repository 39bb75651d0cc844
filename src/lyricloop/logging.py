"""Structured logging for lyricloop.

Log output is configured once, on import, from LoggingSettings
(LYRICLOOP_LOG_LEVEL, LYRICLOOP_LOG_JSON_OUTPUT). Applications embedding
lyricloop may call configure_logging() again with their own choice.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from lyricloop.config import LoggingSettings

__all__ = [
    "configure_logging",
    "get_logger",
    "learner_context",
]


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def configure_logging(
    settings: LoggingSettings | None = None,
    *,
    level: int | str | None = None,
    json_output: bool | None = None,
) -> None:
    """Configure structlog for lyricloop.

    Args:
        settings: Logging settings (read from the environment when omitted)
        level: Overrides settings.level
        json_output: Overrides settings.json_output
    """
    settings = settings or LoggingSettings()
    resolved_level = _resolve_level(level if level is not None else settings.level)
    as_json = settings.json_output if json_output is None else json_output

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if as_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=resolved_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, usually with the calling module's __name__."""
    return structlog.get_logger(name)


@contextmanager
def learner_context(owner_id: str) -> Iterator[None]:
    """Tag every log entry emitted inside the block with the learner ID."""
    with structlog.contextvars.bound_contextvars(owner_id=owner_id):
        yield


_configured = False


def _ensure_configured() -> None:
    global _configured
    if not _configured:
        configure_logging()
        _configured = True


_ensure_configured()
