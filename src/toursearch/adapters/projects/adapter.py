"""Project adapter — Searches the company's project showcase."""

from __future__ import annotations

from toursearch.adapters.base.adapter import EPOCH, SourceAdapter
from toursearch.models.result import SearchResult, SourceKind
from toursearch.stores.base import StoreRecord


class ProjectAdapter(SourceAdapter):
    """Source adapter for projects."""

    @property
    def kind(self) -> SourceKind:
        return SourceKind.PROJECT

    def map_to_result(self, record: StoreRecord) -> SearchResult:
        return SearchResult(
            id=record["id"],
            title=record.get("title") or "Untitled project",
            snippet=self._snippet(record.get("snippet")),
            image_url=record.get("image_url") or None,
            created_at=record.get("created_at") or EPOCH,
            source_kind=self.kind,
            slug=record.get("slug") or None,
        )
