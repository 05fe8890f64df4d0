"""Tour adapter — Searches the tour catalogue.

Tours are the only source with a category (hiking, cultural, ...), which is
passed through so the front end can label the result.
"""

from __future__ import annotations

from toursearch.adapters.base.adapter import EPOCH, SourceAdapter
from toursearch.models.result import SearchResult, SourceKind
from toursearch.stores.base import StoreRecord


class TourAdapter(SourceAdapter):
    """Source adapter for tours."""

    @property
    def kind(self) -> SourceKind:
        return SourceKind.TOUR

    def map_to_result(self, record: StoreRecord) -> SearchResult:
        return SearchResult(
            id=record["id"],
            title=record.get("title") or "Untitled tour",
            snippet=self._snippet(record.get("snippet")),
            image_url=record.get("image_url") or None,
            created_at=record.get("created_at") or EPOCH,
            source_kind=self.kind,
            category=record.get("category") or None,
            slug=record.get("slug") or None,
        )
