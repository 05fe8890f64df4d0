"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from toursearch.config.settings import ObservabilitySettings

# Driver and client libraries that log every connection or request at DEBUG/INFO
LIBRARY_LOGGERS = ("asyncpg", "aiosqlite", "httpx", "httpcore")


def setup_logging(settings: ObservabilitySettings | None = None) -> None:
    """Configure structured logging for TourSearch.

    Library loggers in ``LIBRARY_LOGGERS`` are held at WARNING unless the
    service itself runs at DEBUG.

    Args:
        settings: Observability settings. Uses defaults if None.
    """
    level_name = settings.log_level.upper() if settings else "INFO"
    level = getattr(logging, level_name, logging.INFO)
    log_format = settings.log_format if settings else "json"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def _renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()
