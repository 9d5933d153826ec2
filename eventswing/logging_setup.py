"""Logging for EventSwing.

Modules grab child loggers at import time with ``get_logger``; nothing is
emitted through a handler until the entry point calls ``setup_logging``
with the run's ``LoggingConfig``. Log lines go to stderr so stdout only
carries the signal summary.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from eventswing.config import LoggingConfig

PACKAGE_LOGGER = "eventswing"


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Ticker context passed via ``extra={"extra_fields": {...}}``
        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            payload.update(extra_fields)

        return json.dumps(payload)


class SimpleFormatter(logging.Formatter):
    """Human-readable ``time | level | logger | message`` lines."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def _level_of(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: LoggingConfig, stream: TextIO | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again replaces the previous handler, so the last
    configuration wins.

    Args:
        config: Level and format (``json`` or ``simple``) to apply.
        stream: Destination stream. Defaults to ``sys.stderr``.

    Returns:
        The configured ``eventswing`` logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_level_of(config.level))
    package_logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JSONFormatter() if config.format == "json" else SimpleFormatter())
    package_logger.addHandler(handler)

    # Keep propagating so pytest's caplog still sees records
    package_logger.propagate = True
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``eventswing.<name>`` child logger without configuring anything."""
    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def reset_logging() -> None:
    """Drop handlers and level from the package logger (tests)."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
