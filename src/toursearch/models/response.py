"""Search response models — the wire contract of ``GET /search``."""

from __future__ import annotations

from pydantic import BaseModel, Field

from toursearch.models.result import SearchResult, SourceKind


class SearchResponse(BaseModel):
    """Successful search response.

    ``data`` is the relevance-ordered list of matches across all sources.
    ``degraded`` lists the sources that failed or timed out for this request;
    their results are simply absent from ``data``.
    """

    success: bool = Field(default=True, description="Always true for a completed search")
    data: list[SearchResult] = Field(default_factory=list, description="Ranked search results")
    query: str = Field(description="Original query as supplied by the client")
    total: int = Field(default=0, description="Number of results in data")
    degraded: list[SourceKind] = Field(
        default_factory=list,
        description="Sources that did not contribute because they failed or timed out",
    )


class ErrorResponse(BaseModel):
    """Error body returned for rejected or failed searches."""

    error: str = Field(description="Human-readable error message")
    details: str | None = Field(default=None, description="Underlying failure message (500 only)")
