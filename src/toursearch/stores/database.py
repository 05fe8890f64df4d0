"""Async database engine construction."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from toursearch.config.settings import DatabaseSettings

logger = logging.getLogger(__name__)


def create_store_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the process-wide async engine shared by all content stores.

    Pool sizing only applies to server databases; SQLite uses SQLAlchemy's
    default pool for its dialect.

    Args:
        settings: Database connection settings.

    Returns:
        A configured ``AsyncEngine``. Call ``dispose()`` on shutdown.
    """
    url = make_url(settings.url)
    kwargs: dict[str, Any] = {"echo": settings.echo}
    if url.get_backend_name() != "sqlite":
        kwargs.update(
            pool_pre_ping=True,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_recycle=settings.pool_recycle,
        )

    engine = create_async_engine(url, **kwargs)
    logger.info("Created database engine for %s", url.render_as_string(hide_password=True))
    return engine
