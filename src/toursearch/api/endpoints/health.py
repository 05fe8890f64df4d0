"""Health check endpoints — Service and per-source health monitoring."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from toursearch import __version__
from toursearch.adapters.base.adapter import AdapterHealth
from toursearch.api.deps import get_engine
from toursearch.core.engine import SearchEngine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


# ── Response models ──────────────────────────────────────────────────────


class HealthResponse(BaseModel):
    """Service health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="TourSearch server version")
    service: str = Field(description="Service name ('toursearch')")
    active_sources: list[str] = Field(description="Content sources taking part in search")


class SourceHealthResponse(BaseModel):
    """Per-source health check response."""

    sources: dict[str, AdapterHealth] = Field(description="Map of source name to its health status")


# ── Endpoints ────────────────────────────────────────────────────────────


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service Health Check",
)
async def health_check(
    engine: SearchEngine = Depends(get_engine),
) -> HealthResponse:
    """Basic health check endpoint with source info."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        service="toursearch",
        active_sources=engine.adapter_registry.active_sources,
    )


@router.get(
    "/health/sources",
    response_model=SourceHealthResponse,
    summary="Source Health Check",
    description="Check that every active content source can reach its store.",
)
async def source_health(
    engine: SearchEngine = Depends(get_engine),
) -> SourceHealthResponse:
    """Check health of all content sources."""
    statuses = await engine.adapter_registry.health_check_all()
    unhealthy = [name for name, h in statuses.items() if h.status != "healthy"]
    if unhealthy:
        logger.warning("Unhealthy sources: %s", unhealthy)
    return SourceHealthResponse(sources=statuses)
