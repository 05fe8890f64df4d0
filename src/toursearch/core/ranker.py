"""Relevance ranking for merged results.

Two keys, applied with a stable sort:
  1. title match — the term occurs in the result's title
  2. recency — ``created_at``, newest first

Title match is recomputed from the result title. Results equal on both
keys keep their fan-in order.
"""

from __future__ import annotations

from toursearch.models.query import SearchTerm
from toursearch.models.result import SearchResult


def is_title_match(result: SearchResult, term: SearchTerm) -> bool:
    return term.matches(result.title)


def rank_results(results: list[SearchResult], term: SearchTerm) -> list[SearchResult]:
    """Return ``results`` in relevance order without modifying the input."""
    return sorted(
        results,
        key=lambda r: (not is_title_match(r, term), -r.created_at.timestamp()),
    )
