"""Result merger — Fans a search out to every source and merges the answers.

Each adapter runs as its own task with its own timeout. A source that fails
or times out becomes a degraded ``SourceOutcome`` and contributes nothing;
the request still succeeds with the remaining sources. Cancelling the
caller cancels every in-flight adapter task.
"""

from __future__ import annotations

import asyncio
import logging
import time

from toursearch.adapters.base.adapter import SourceAdapter
from toursearch.adapters.base.registry import AdapterRegistry
from toursearch.core.exceptions import SearchFailedError
from toursearch.core.ranker import rank_results
from toursearch.models.query import SearchTerm
from toursearch.models.result import RankedResultSet, SearchResult, SourceOutcome

logger = logging.getLogger(__name__)


class ResultMerger:
    """Concurrent fan-out/fan-in over the registered source adapters.

    Args:
        registry: Registry holding the active source adapters.
        source_timeout: Seconds each adapter may take before it is abandoned.
        max_total_results: Optional cap on the merged list, applied after ranking.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        source_timeout: float = 2.0,
        max_total_results: int | None = None,
    ) -> None:
        self._registry = registry
        self.source_timeout = source_timeout
        self.max_total_results = max_total_results

    async def merge(self, term: SearchTerm) -> RankedResultSet:
        """Search every source for ``term`` and rank the combined results.

        Args:
            term: The sanitized search term.

        Returns:
            The ranked result set with one outcome per source.

        Raises:
            SearchFailedError: If sources are registered but none of them answered.
        """
        adapters = self._registry.adapters()
        if not adapters:
            logger.warning("No source adapters registered, returning empty results")
            return RankedResultSet()

        # gather preserves adapter order regardless of completion order
        outcomes: list[SourceOutcome] = await asyncio.gather(*(self._invoke(a, term) for a in adapters))

        if all(o.degraded for o in outcomes):
            reasons = "; ".join(f"{o.source_kind.value}: {o.reason}" for o in outcomes)
            raise SearchFailedError(f"All search sources failed ({reasons})")

        combined: list[SearchResult] = [r for o in outcomes for r in o.results]
        ranked = rank_results(combined, term)
        if self.max_total_results is not None:
            ranked = ranked[: self.max_total_results]

        return RankedResultSet(results=ranked, outcomes=outcomes)

    async def _invoke(self, adapter: SourceAdapter, term: SearchTerm) -> SourceOutcome:
        """Run one adapter and tag how it ended. Never raises except on cancellation."""
        start = time.monotonic()
        try:
            results = await asyncio.wait_for(adapter.search(term), timeout=self.source_timeout)
        except TimeoutError:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.warning(
                "Source '%s' timed out after %d ms for '%s'",
                adapter.name,
                elapsed_ms,
                term.text,
            )
            return SourceOutcome.timed_out(adapter.kind, elapsed_ms=elapsed_ms)
        except Exception as e:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.warning("Source '%s' failed for '%s': %s", adapter.name, term.text, e)
            return SourceOutcome.failed(adapter.kind, reason=str(e), elapsed_ms=elapsed_ms)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Source '%s' returned %d results in %d ms", adapter.name, len(results), elapsed_ms)
        return SourceOutcome.ok(adapter.kind, results, elapsed_ms=elapsed_ms)
