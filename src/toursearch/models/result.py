"""Search result models — the normalized shape shared by every content source.

Each source stores its content differently (tours carry a category, blog
posts split text into excerpt and body, projects have neither). Adapters map
their rows into ``SearchResult`` so the merger can rank them together.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


class SourceKind(str, Enum):
    """Content types taking part in federated search.

    Values are the ``section`` names used by the site's front end.
    """

    TOUR = "tour"
    BLOG_POST = "blog"
    PROJECT = "project"

    @property
    def path_prefix(self) -> str:
        return _PATH_PREFIXES[self]


_PATH_PREFIXES = {
    SourceKind.TOUR: "/tours",
    SourceKind.BLOG_POST: "/blog",
    SourceKind.PROJECT: "/projects",
}


class SearchResult(BaseModel):
    """A single match from one content source.

    ``id`` is only unique within ``source_kind``; the pair
    ``(source_kind, id)`` identifies a result across sources.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int | str = Field(description="Source-scoped identifier")
    title: str = Field(description="Display title")
    snippet: str = Field(default="", description="Short descriptive text")
    image_url: str | None = Field(default=None, description="Cover image URL")
    created_at: datetime = Field(description="Creation timestamp (timezone-aware, UTC if the store has none)")
    source_kind: SourceKind = Field(description="Content type this result comes from")
    category: str | None = Field(default=None, description="Tour category (tours only)")
    slug: str | None = Field(default=None, description="URL slug, when the source has one")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        # TIMESTAMP columns without time zone come back naive
        return v if v.tzinfo is not None else v.replace(tzinfo=UTC)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        """Site-relative link to the result's detail page."""
        return f"{self.source_kind.path_prefix}/{self.id}"


class OutcomeStatus(str, Enum):
    """How a single source invocation ended."""

    OK = "ok"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


class SourceOutcome(BaseModel):
    """Tagged result of invoking one source adapter.

    Exactly one of three shapes:
      - ``ok``: ``results`` holds the source's ordered slice
      - ``timed_out``: the source exceeded its timeout
      - ``failed``: the source raised; ``reason`` says why
    """

    source_kind: SourceKind
    status: OutcomeStatus
    results: list[SearchResult] = Field(default_factory=list)
    reason: str | None = None
    elapsed_ms: int = 0

    @classmethod
    def ok(cls, source_kind: SourceKind, results: list[SearchResult], elapsed_ms: int = 0) -> SourceOutcome:
        return cls(source_kind=source_kind, status=OutcomeStatus.OK, results=results, elapsed_ms=elapsed_ms)

    @classmethod
    def timed_out(cls, source_kind: SourceKind, elapsed_ms: int = 0) -> SourceOutcome:
        return cls(
            source_kind=source_kind,
            status=OutcomeStatus.TIMED_OUT,
            reason="timed out",
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def failed(cls, source_kind: SourceKind, reason: str, elapsed_ms: int = 0) -> SourceOutcome:
        return cls(source_kind=source_kind, status=OutcomeStatus.FAILED, reason=reason, elapsed_ms=elapsed_ms)

    @property
    def degraded(self) -> bool:
        return self.status is not OutcomeStatus.OK


class RankedResultSet(BaseModel):
    """Merged, relevance-ordered results for one request."""

    results: list[SearchResult] = Field(default_factory=list)
    outcomes: list[SourceOutcome] = Field(default_factory=list)

    @property
    def degraded_sources(self) -> list[SourceKind]:
        return [o.source_kind for o in self.outcomes if o.degraded]
