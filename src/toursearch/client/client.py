"""TourSearch Python SDK — Async and sync clients for the TourSearch REST API.

Usage::

    # Async
    async with AsyncTourSearchClient("http://localhost:8080") as client:
        response = await client.search("shahdag")

    # Sync (wraps async client internally)
    client = TourSearchClient("http://localhost:8080")
    response = client.search("shahdag")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar, cast

import httpx

_T = TypeVar("_T")

logger = logging.getLogger(__name__)

SearchResult = dict[str, Any]
"""Search response dict (mirrors ``SearchResponse`` JSON)."""


class QueryRejectedError(ValueError):
    """Raised when the server rejects a query with HTTP 400."""


# ═══════════════════════════════════════════════════════════════════════════════
# Async client
# ═══════════════════════════════════════════════════════════════════════════════


class AsyncTourSearchClient:
    """Async Python client for the TourSearch API.

    Args:
        base_url: TourSearch server URL, e.g. ``"http://localhost:8080"``.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.

    Example::

        async with AsyncTourSearchClient("http://localhost:8080") as client:
            resp = await client.search("hiking")
            print(resp["total"], [r["title"] for r in resp["data"]])
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 10.0,
        **httpx_kwargs: Any,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            **httpx_kwargs,
        )

    async def __aenter__(self) -> AsyncTourSearchClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ── Health ──

    async def health(self) -> dict[str, Any]:
        """Check server health."""
        resp = await self._client.get("/health")
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def source_health(self) -> dict[str, Any]:
        """Check the health of every content source."""
        resp = await self._client.get("/health/sources")
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    # ── Search ──

    async def search(self, query: str) -> SearchResult:
        """Search tours, blog posts, and projects.

        Args:
            query: Search term (at least 2 characters after trimming).

        Returns:
            Search response dict with ``data``, ``query``, ``total`` and
            ``degraded`` keys.

        Raises:
            QueryRejectedError: If the server rejects the query.
            httpx.HTTPStatusError: On any other error status.
        """
        resp = await self._client.get("/search", params={"q": query})
        if resp.status_code == 400:
            raise QueryRejectedError(_error_message(resp))
        resp.raise_for_status()
        result = cast(dict[str, Any], resp.json())
        if result.get("degraded"):
            logger.warning("Partial results for '%s': sources %s unavailable", query, result["degraded"])
        return result


# ═══════════════════════════════════════════════════════════════════════════════
# Sync client (wraps AsyncTourSearchClient)
# ═══════════════════════════════════════════════════════════════════════════════


class TourSearchClient:
    """Synchronous Python client for the TourSearch API.

    Wraps :class:`AsyncTourSearchClient` using ``asyncio.run``.

    Args:
        base_url: TourSearch server URL.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 10.0,
        **httpx_kwargs: Any,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._httpx_kwargs = httpx_kwargs

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Run an async coroutine synchronously."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop and loop.is_running():
            # Already inside an event loop (e.g. Jupyter) — run in a worker thread
            import concurrent.futures

            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
                return pool.submit(asyncio.run, coro).result()
        return asyncio.run(coro)

    def _make_client(self) -> AsyncTourSearchClient:
        return AsyncTourSearchClient(
            self._base_url,
            timeout=self._timeout,
            **self._httpx_kwargs,
        )

    def health(self) -> dict[str, Any]:
        """Check server health."""

        async def _call() -> dict[str, Any]:
            async with self._make_client() as c:
                return await c.health()

        return self._run(_call())

    def source_health(self) -> dict[str, Any]:
        """Check the health of every content source."""

        async def _call() -> dict[str, Any]:
            async with self._make_client() as c:
                return await c.source_health()

        return self._run(_call())

    def search(self, query: str) -> SearchResult:
        """Search tours, blog posts, and projects."""

        async def _call() -> SearchResult:
            async with self._make_client() as c:
                return await c.search(query)

        return self._run(_call())


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return resp.text
