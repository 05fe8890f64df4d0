"""Adapter Registry — Holds the source adapters taking part in federated search.

The registry is built once at startup and passed by reference to the
merger. Adapters are returned in ``SourceKind`` declaration order, which
fixes the fan-in order of results regardless of registration order.
"""

from __future__ import annotations

import asyncio
import logging

from toursearch.adapters.base.adapter import AdapterHealth, SourceAdapter
from toursearch.models.result import SourceKind

logger = logging.getLogger(__name__)


class AdapterNotFoundError(Exception):
    """Raised when no adapter is registered for a source kind."""


class AdapterRegistry:
    """Registry of source adapters, at most one per ``SourceKind``.

    Example:
        >>> registry = AdapterRegistry()
        >>> registry.register(TourAdapter(store))
        >>> registry.get(SourceKind.TOUR)
    """

    def __init__(self) -> None:
        self._adapters: dict[SourceKind, SourceAdapter] = {}

    def register(self, adapter: SourceAdapter) -> None:
        """Register an adapter under its source kind.

        Args:
            adapter: The adapter to register.
        """
        if adapter.kind in self._adapters:
            logger.warning("Overwriting existing adapter registration: %s", adapter.name)
        self._adapters[adapter.kind] = adapter
        logger.info("Registered source adapter: %s", adapter.name)

    def get(self, kind: SourceKind) -> SourceAdapter:
        """Get the adapter for ``kind``.

        Raises:
            AdapterNotFoundError: If no adapter is registered for ``kind``.
        """
        if kind not in self._adapters:
            raise AdapterNotFoundError(
                f"No adapter registered for source '{kind.value}'. "
                f"Active sources: {self.active_sources}"
            )
        return self._adapters[kind]

    def adapters(self) -> list[SourceAdapter]:
        """All registered adapters in ``SourceKind`` declaration order."""
        return [self._adapters[kind] for kind in SourceKind if kind in self._adapters]

    async def health_check_all(self) -> dict[str, AdapterHealth]:
        """Run health checks on all adapters concurrently.

        Returns:
            Dictionary mapping source names to their health status.
        """
        adapters = self.adapters()
        checks = await asyncio.gather(*(a.health_check() for a in adapters), return_exceptions=True)

        results: dict[str, AdapterHealth] = {}
        for adapter, check in zip(adapters, checks, strict=True):
            if isinstance(check, Exception):
                results[adapter.name] = AdapterHealth(status="unhealthy", message=str(check))
            elif isinstance(check, BaseException):
                raise check
            else:
                results[adapter.name] = check
        return results

    def clear(self) -> None:
        """Drop all registrations."""
        self._adapters.clear()

    @property
    def active_sources(self) -> list[str]:
        """Names of all registered sources, in declaration order."""
        return [a.name for a in self.adapters()]

    def __len__(self) -> int:
        return len(self._adapters)
