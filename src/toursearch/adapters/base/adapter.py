"""Base source adapter — Abstract interface for per-content-type search sources.

Every content type taking part in federated search implements this
interface. The adapter is responsible for:
  1. Querying its content store for substring matches
  2. Mapping the store's records to the shared ``SearchResult`` schema
  3. Reporting health status
"""

from __future__ import annotations

import html
import logging
import re
import time
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from toursearch.adapters.base.exceptions import SourceUnavailableError
from toursearch.models.query import SearchTerm
from toursearch.models.result import SearchResult, SourceKind
from toursearch.stores.base import ContentStore, StoreRecord

logger = logging.getLogger(__name__)

# Records without a creation time sort after everything else
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


class AdapterHealth(BaseModel):
    """Health status of a source adapter."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


def make_snippet(text: str | None, max_length: int) -> str:
    """Reduce stored rich text to a short plain-text snippet.

    Strips HTML tags left by the admin editor, unescapes entities, collapses
    whitespace, and cuts at a word boundary when longer than ``max_length``.
    """
    if not text:
        return ""
    plain = _WS_RE.sub(" ", html.unescape(_TAG_RE.sub(" ", text))).strip()
    if len(plain) <= max_length:
        return plain
    cut = plain[: max_length - 1]
    space = cut.rfind(" ")
    if space > max_length // 2:
        cut = cut[:space]
    return cut.rstrip(" ,.;:") + "…"


class SourceAdapter(ABC):
    """Abstract base class for content source adapters.

    Subclasses declare their ``kind`` and implement ``map_to_result()``;
    querying, capping, ordering and error translation live here.

    Adapters hold no mutable state after construction and only read from
    their store, so one instance serves all concurrent requests.

    Args:
        store: Repository for this source's content table.
        limit: Maximum number of results returned per search.
        snippet_length: Maximum snippet length in characters.
    """

    def __init__(self, store: ContentStore, limit: int = 5, snippet_length: int = 240) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._store = store
        self._limit = limit
        self._snippet_length = snippet_length

    @property
    @abstractmethod
    def kind(self) -> SourceKind:
        """The content type this adapter serves."""

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def limit(self) -> int:
        return self._limit

    @abstractmethod
    def map_to_result(self, record: StoreRecord) -> SearchResult:
        """Map a store record to a ``SearchResult``.

        Args:
            record: A single record returned by the store.

        Returns:
            The normalized result.
        """

    async def search(self, term: SearchTerm) -> list[SearchResult]:
        """Find up to ``limit`` matches for ``term``, most recent first.

        Args:
            term: The sanitized search term.

        Returns:
            Ordered list of results (possibly empty).

        Raises:
            SourceUnavailableError: If the store query or record mapping fails.
        """
        try:
            records = await self._store.find_by_substring(term, self._limit)
            results = [self.map_to_result(r) for r in records[: self._limit]]
        except SourceUnavailableError:
            raise
        except Exception as e:
            raise SourceUnavailableError(f"{self.name} search failed: {e}") from e

        # stable: equal timestamps keep the store's order
        results.sort(key=lambda r: r.created_at, reverse=True)
        return results

    async def health_check(self) -> AdapterHealth:
        """Check that the backing store answers a trivial read."""
        start = time.monotonic()
        try:
            await self._store.ping()
        except Exception as e:
            logger.warning("Health check failed for source '%s': %s", self.name, e)
            return AdapterHealth(
                status="unhealthy",
                latency_ms=int((time.monotonic() - start) * 1000),
                last_check=datetime.now(UTC).isoformat(),
                message=str(e),
            )
        return AdapterHealth(
            status="healthy",
            latency_ms=int((time.monotonic() - start) * 1000),
            last_check=datetime.now(UTC).isoformat(),
            message=f"Table: {self._store.name}",
        )

    def _snippet(self, text: str | None) -> str:
        return make_snippet(text, self._snippet_length)
