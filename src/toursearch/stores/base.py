"""Base content store — the repository interface source adapters read through."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, TypedDict

from toursearch.models.query import SearchTerm


class StoreRecord(TypedDict, total=False):
    """One matching row, already projected to the shared search shape."""

    id: Any
    title: str
    snippet: str | None
    image_url: str | None
    created_at: datetime | None
    category: str | None
    slug: str | None


class ContentStore(ABC):
    """Read-only access to one content table.

    Implementations must not mutate any state; ``find_by_substring`` is a
    pure read and may be cancelled at any await point.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the backing table or collection."""

    @abstractmethod
    async def find_by_substring(self, term: SearchTerm, limit: int) -> list[StoreRecord]:
        """Return up to ``limit`` records whose searchable text contains ``term``.

        Records are ordered most recent first.

        Args:
            term: The sanitized search term.
            limit: Maximum number of records to return.

        Returns:
            Ordered list of matching records (possibly empty).
        """

    @abstractmethod
    async def ping(self) -> None:
        """Issue a trivial read to confirm the store is reachable.

        Raises:
            Exception: Whatever the underlying driver raises on failure.
        """
