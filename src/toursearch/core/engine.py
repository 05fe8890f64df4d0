"""TourSearch Engine — Orchestrates one federated search request.

A request moves through three strictly sequential states:

  VALIDATING  → QuerySanitizer turns the raw query into a SearchTerm
                (a rejected query ends here; no store is touched)
  SEARCHING   → ResultMerger fans out to every source adapter, collects
                their outcomes, and ranks the combined results
  FORMATTING  → ResponseFormatter builds the wire response

There are no retries and no loops. The engine also owns process-wide
resources: the database engine shared by all content stores and the
adapter registry, both built once in ``initialize()``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine

from toursearch.adapters.base.exceptions import ConfigurationError
from toursearch.adapters.base.registry import AdapterRegistry
from toursearch.adapters.blog.adapter import BlogPostAdapter
from toursearch.adapters.projects.adapter import ProjectAdapter
from toursearch.adapters.tours.adapter import TourAdapter
from toursearch.core.exceptions import QueryValidationError, SearchFailedError
from toursearch.core.formatter import ResponseFormatter
from toursearch.core.merger import ResultMerger
from toursearch.core.sanitizer import QuerySanitizer
from toursearch.models.response import SearchResponse
from toursearch.models.result import SourceKind
from toursearch.stores.database import create_store_engine
from toursearch.stores.sql import SqlContentStore, blog_post_store, project_store, tour_store

if TYPE_CHECKING:
    from toursearch.adapters.base.adapter import SourceAdapter
    from toursearch.config.settings import Settings

logger = logging.getLogger(__name__)

StoreFactory = Callable[..., SqlContentStore]

# Maps each source kind to its store factory and adapter class
_SOURCE_MAP: dict[SourceKind, tuple[StoreFactory, type[SourceAdapter]]] = {
    SourceKind.TOUR: (tour_store, TourAdapter),
    SourceKind.BLOG_POST: (blog_post_store, BlogPostAdapter),
    SourceKind.PROJECT: (project_store, ProjectAdapter),
}


class SearchState(str, Enum):
    """Request states; REJECTED and COMPLETED are terminal."""

    VALIDATING = "validating"
    SEARCHING = "searching"
    FORMATTING = "formatting"
    REJECTED = "rejected"
    COMPLETED = "completed"


class SearchEngine:
    """Core orchestrator for federated search.

    Pipeline:
      raw query → [Sanitizer] → SearchTerm
                → [Merger]    → RankedResultSet  (adapters run concurrently)
                → [Formatter] → SearchResponse

    Attributes:
        settings: Application configuration.
        sanitizer: Query validation and normalization.
        adapter_registry: Registry of source adapters.
        merger: Fan-out/fan-in and ranking.
        formatter: Wire response construction.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        search = settings.search
        self.sanitizer = QuerySanitizer(
            min_length=search.min_query_length,
            max_length=search.max_query_length,
        )
        self.adapter_registry = AdapterRegistry()
        self.merger = ResultMerger(
            self.adapter_registry,
            source_timeout=search.source_timeout,
            max_total_results=search.max_total_results,
        )
        self.formatter = ResponseFormatter()
        self._db: AsyncEngine | None = None

    async def initialize(self) -> None:
        """Create the shared database engine and register the enabled sources."""
        self._db = create_store_engine(self.settings.database)
        metadata = MetaData()

        for name, source_cfg in self.settings.search.sources.items():
            try:
                kind = SourceKind(name)
            except ValueError as e:
                raise ConfigurationError(
                    f"Unknown search source '{name}'. Known sources: {[k.value for k in SourceKind]}"
                ) from e

            if not source_cfg.enabled:
                logger.info("Source '%s' is disabled, skipping", name)
                continue

            store_factory, adapter_class = _SOURCE_MAP[kind]
            if source_cfg.table:
                store = store_factory(self._db, metadata, source_cfg.table)
            else:
                store = store_factory(self._db, metadata)
            self.adapter_registry.register(
                adapter_class(
                    store,
                    limit=self.settings.search.per_source_limit,
                    snippet_length=self.settings.search.snippet_length,
                )
            )

        logger.info("TourSearch engine initialized with sources: %s", self.adapter_registry.active_sources)

    async def shutdown(self) -> None:
        """Release the database connection pool."""
        self.adapter_registry.clear()
        if self._db is not None:
            await self._db.dispose()
            self._db = None
        logger.info("TourSearch engine shut down")

    async def search(self, raw_query: str | None) -> SearchResponse:
        """Run one federated search.

        Args:
            raw_query: The query as supplied by the client (None if omitted).

        Returns:
            The ranked search response.

        Raises:
            QueryValidationError: If the query is rejected; no source is queried.
            SearchFailedError: If no source could answer or formatting fails.
        """
        start_time = time.monotonic()

        self._enter(SearchState.VALIDATING)
        try:
            term = self.sanitizer.sanitize(raw_query)
        except QueryValidationError:
            self._enter(SearchState.REJECTED)
            raise

        self._enter(SearchState.SEARCHING)
        ranked = await self.merger.merge(term)

        self._enter(SearchState.FORMATTING)
        try:
            response = self.formatter.format(term.raw, ranked)
        except Exception as e:
            raise SearchFailedError(f"Could not format search response: {e}") from e

        self._enter(SearchState.COMPLETED)
        logger.info(
            "Search for '%s' complete: %d results, %d degraded sources in %d ms",
            term.text,
            response.total,
            len(response.degraded),
            int((time.monotonic() - start_time) * 1000),
        )
        return response

    @staticmethod
    def _enter(state: SearchState) -> None:
        logger.debug("Search state: %s", state.value)
