# core/logging_utils.py

"""
Structured logging for the grade calculator, built on structlog.

`configure_logging()` wires structlog on top of the standard library `logging` module with
a single stdout handler. Output is either human-readable console lines or one JSON object per
line. Modules obtain loggers with `create_logger()` at import time; loggers are lazy, so
configuration applied later in start-up still takes effect.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

LOG_FORMATS = ("console", "json")


def configure_logging(log_level: str = "WARNING", log_format: str = "console") -> None:
    """
    Configures structlog and the standard library root logger.

    Args:
        log_level (str): Minimum level name, e.g. "DEBUG" or "WARNING".
        log_format (str): "console" for human-readable output, "json" for JSON lines.

    Raises:
        ValueError: If `log_format` or `log_level` is not recognized.
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {log_format!r}")

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]

    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        level=level,
        force=True,
    )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)
