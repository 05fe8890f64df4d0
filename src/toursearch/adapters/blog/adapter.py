"""Blog adapter — Searches published blog posts.

Posts match on title, excerpt, or body. The snippet is the excerpt when one
was written, otherwise the start of the body with editor markup removed.
"""

from __future__ import annotations

from toursearch.adapters.base.adapter import EPOCH, SourceAdapter
from toursearch.models.result import SearchResult, SourceKind
from toursearch.stores.base import StoreRecord


class BlogPostAdapter(SourceAdapter):
    """Source adapter for blog posts."""

    @property
    def kind(self) -> SourceKind:
        return SourceKind.BLOG_POST

    def map_to_result(self, record: StoreRecord) -> SearchResult:
        return SearchResult(
            id=record["id"],
            title=record.get("title") or "Untitled post",
            snippet=self._snippet(record.get("snippet")),
            image_url=record.get("image_url") or None,
            created_at=record.get("created_at") or EPOCH,
            source_kind=self.kind,
            slug=record.get("slug") or None,
        )
