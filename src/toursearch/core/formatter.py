"""Response formatter — Shapes ranked results and errors into the wire contract."""

from __future__ import annotations

from toursearch.models.response import ErrorResponse, SearchResponse
from toursearch.models.result import RankedResultSet

SEARCH_FAILED_MESSAGE = "Failed to search"


class ResponseFormatter:
    """Builds the bodies returned by ``GET /search``."""

    @staticmethod
    def format(raw_query: str, ranked: RankedResultSet) -> SearchResponse:
        """Wrap a ranked result set in a success response.

        Args:
            raw_query: The query exactly as the client sent it.
            ranked: The merged, ranked results.
        """
        return SearchResponse(
            success=True,
            data=ranked.results,
            query=raw_query,
            total=len(ranked.results),
            degraded=ranked.degraded_sources,
        )

    @staticmethod
    def reject(reason: str) -> ErrorResponse:
        """Body for a query rejected during validation."""
        return ErrorResponse(error=reason)

    @staticmethod
    def failure(error: BaseException) -> ErrorResponse:
        """Body for an unexpected failure while searching or formatting."""
        return ErrorResponse(error=SEARCH_FAILED_MESSAGE, details=str(error) or type(error).__name__)
