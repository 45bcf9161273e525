"""Logging setup for the personal_finances package."""

import logging
import sys
from typing import Any, Optional, TextIO

_LOGGER_NAME = "personal_finances"

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


class KeyValueFormatter(logging.Formatter):
    """Formats a record as ``LEVEL logger event key=value ...``."""

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, Any] = {
            key: value
            for key, value in vars(record).items()
            if key not in _STDLIB_KEYS
        }
        line = f"{record.levelname} {record.name} {record.getMessage()}"
        if fields:
            line += " " + " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    level: int | str = logging.WARNING, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Route package logs to a single stream handler.

    Calling it again replaces the handler instead of adding another one.

    Args:
        level: Level name or number for the package logger
        stream: Output stream, stderr by default

    Returns:
        The package logger
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(KeyValueFormatter())
    logger.addHandler(handler)
    return logger


def reset_logging() -> None:
    """Drop package handlers and let records propagate again."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
