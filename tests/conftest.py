"""Shared test fixtures and configuration."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

import pytest

from toursearch.adapters.base.registry import AdapterRegistry
from toursearch.adapters.blog.adapter import BlogPostAdapter
from toursearch.adapters.projects.adapter import ProjectAdapter
from toursearch.adapters.tours.adapter import TourAdapter
from toursearch.config.settings import Settings
from toursearch.core.engine import SearchEngine
from toursearch.core.sanitizer import QuerySanitizer
from toursearch.models.query import SearchTerm
from toursearch.stores.base import ContentStore, StoreRecord


class FakeStore(ContentStore):
    """In-memory content store.

    Records use the shared store shape plus an optional ``body`` key holding
    searchable text that is not returned as the snippet (like a blog body).
    """

    def __init__(
        self,
        records: list[dict[str, Any]] | None = None,
        *,
        name: str = "fake",
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.records = records or []
        self._name = name
        self.error = error
        self.delay = delay
        self.calls = 0
        self.cancelled = False

    @property
    def name(self) -> str:
        return self._name

    async def find_by_substring(self, term: SearchTerm, limit: int) -> list[StoreRecord]:
        self.calls += 1
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        matches = [
            r
            for r in self.records
            if term.matches(r.get("title")) or term.matches(r.get("snippet")) or term.matches(r.get("body"))
        ]
        matches.sort(key=lambda r: r["created_at"], reverse=True)
        return [StoreRecord(**{k: v for k, v in r.items() if k != "body"}) for r in matches[:limit]]

    async def ping(self) -> None:
        if self.error is not None:
            raise self.error


def ts(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, 12, 0, tzinfo=UTC)


TOUR_RECORDS = [
    {
        "id": 1,
        "title": "Shahdag Day Hike",
        "snippet": "A full day on the trails of Shahdag National Park.",
        "image_url": "https://cdn.example.com/tours/shahdag.jpg",
        "created_at": ts(2024, 5, 1),
        "category": "hiking",
        "slug": "shahdag-day-hike",
    },
    {
        "id": 2,
        "title": "Gabala Waterfalls",
        "snippet": "Forest walk to the Seven Beauties waterfall.",
        "image_url": None,
        "created_at": ts(2024, 6, 1),
        "category": "nature",
        "slug": "gabala-waterfalls",
    },
]

BLOG_RECORDS = [
    {
        "id": 10,
        "title": "Ten Winter Escapes",
        "snippet": "Where to find snow this season.",
        "body": "Our favourite is the Shahdag ski resort in the Greater Caucasus.",
        "image_url": "https://cdn.example.com/blog/winter.jpg",
        "created_at": ts(2024, 7, 1),
        "slug": "ten-winter-escapes",
    },
    {
        "id": 11,
        "title": "Baku Old Town Walk",
        "snippet": "Walking the lanes of Icherisheher.",
        "image_url": None,
        "created_at": ts(2023, 3, 1),
        "slug": "baku-old-town-walk",
    },
]

PROJECT_RECORDS = [
    {
        "id": 20,
        "title": "Mountain Trail Signage",
        "snippet": "Marking hiking trails around Shahdag and Laza.",
        "image_url": None,
        "created_at": ts(2024, 2, 1),
    },
    {
        "id": 21,
        "title": "Waterfall Cleanup",
        "snippet": "Volunteer cleanup days in Gabala.",
        "image_url": None,
        "created_at": ts(2022, 9, 1),
    },
]


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        database={"url": "sqlite+aiosqlite:///:memory:"},
        search={"source_timeout": 0.5},
    )


@pytest.fixture
def sanitizer() -> QuerySanitizer:
    return QuerySanitizer()


@pytest.fixture
def shahdag(sanitizer: QuerySanitizer) -> SearchTerm:
    return sanitizer.sanitize("Shahdag")


@pytest.fixture
def sample_records() -> tuple[list[dict[str, Any]], list[dict[str, Any]], list[dict[str, Any]]]:
    """Fresh copies of the tour, blog, and project records."""
    return (
        [dict(r) for r in TOUR_RECORDS],
        [dict(r) for r in BLOG_RECORDS],
        [dict(r) for r in PROJECT_RECORDS],
    )


@pytest.fixture
def make_store():
    """Factory for in-memory stores."""
    return FakeStore


@pytest.fixture
def tour_store() -> FakeStore:
    return FakeStore([dict(r) for r in TOUR_RECORDS], name="tours")


@pytest.fixture
def blog_store() -> FakeStore:
    return FakeStore([dict(r) for r in BLOG_RECORDS], name="blog_posts")


@pytest.fixture
def project_store() -> FakeStore:
    return FakeStore([dict(r) for r in PROJECT_RECORDS], name="projects")


@pytest.fixture
def registry(tour_store: FakeStore, blog_store: FakeStore, project_store: FakeStore) -> AdapterRegistry:
    """Registry with all three sources backed by in-memory stores."""
    reg = AdapterRegistry()
    reg.register(TourAdapter(tour_store))
    reg.register(BlogPostAdapter(blog_store))
    reg.register(ProjectAdapter(project_store))
    return reg


@pytest.fixture
def engine(settings: Settings, registry: AdapterRegistry) -> SearchEngine:
    """Engine wired to the in-memory registry instead of a database."""
    eng = SearchEngine(settings)
    for adapter in registry.adapters():
        eng.adapter_registry.register(adapter)
    return eng
