"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from toursearch import __version__
from toursearch.api.deps import set_engine
from toursearch.api.router import router
from toursearch.config.settings import Settings
from toursearch.core.engine import SearchEngine
from toursearch.observability.logging import setup_logging

logger = logging.getLogger(__name__)

CONFIG_FILE = "toursearch-config.yaml"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        yaml_path = Path(CONFIG_FILE)
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        setup_logging(settings.observability)
        logger.info("Starting TourSearch v%s", __version__)

        engine = SearchEngine(settings)
        await engine.initialize()
        set_engine(engine)

        app.state.settings = settings
        app.state.engine = engine

        logger.info("TourSearch is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down TourSearch...")
        await engine.shutdown()
        set_engine(None)
        logger.info("TourSearch shutdown complete")

    app = FastAPI(
        title="TourSearch",
        description="Federated search over the tourism site's tours, blog posts, and projects.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Render framework errors (404, 405, ...) with the same ``error`` body as search errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    app.include_router(router)

    return app
