"""Search endpoint — Federated search across tours, blog posts, and projects."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, Response

from toursearch.api.deps import get_engine
from toursearch.core.engine import SearchEngine
from toursearch.core.exceptions import QueryValidationError
from toursearch.models.response import ErrorResponse, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])

# nginx "client closed request"
CLIENT_CLOSED_REQUEST = 499


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Federated Search",
    description=(
        "Search tours, blog posts, and projects for a substring of their title or "
        "description. Results from all sources are merged into one list: title "
        "matches first, then newest first.\n\n"
        "A source that fails or times out is left out of `data` and listed in "
        "`degraded`; the request still succeeds."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Query missing or shorter than 2 characters"},
        500: {"model": ErrorResponse, "description": "Search failed (e.g. every source unavailable)"},
    },
)
async def search(
    request: Request,
    q: str | None = Query(default=None, description="Search term, at least 2 characters after trimming"),
    engine: SearchEngine = Depends(get_engine),
) -> SearchResponse | Response:
    """Execute a federated search.

    Args:
        q: The raw search term.
        engine: The search engine instance (injected).

    Returns:
        A SearchResponse, or a JSON error body with status 400 or 500.
        If the client disconnects first, the search is cancelled and an
        empty 499 is returned.
    """
    try:
        response = await _search_until_disconnect(request, engine, q)
        if response is None:
            logger.info("Client disconnected, search for %r cancelled", q)
            return Response(status_code=CLIENT_CLOSED_REQUEST)
        return response
    except QueryValidationError as e:
        return JSONResponse(
            status_code=400,
            content=engine.formatter.reject(str(e)).model_dump(exclude_none=True),
        )
    except Exception as e:
        logger.error("Search failed: %s", e, exc_info=True)
        return JSONResponse(
            status_code=500,
            content=engine.formatter.failure(e).model_dump(),
        )


async def _search_until_disconnect(
    request: Request, engine: SearchEngine, q: str | None
) -> SearchResponse | None:
    """Run the search, cancelling it if the client goes away first.

    Returns None when the search was cancelled by a disconnect.
    """
    search_task = asyncio.create_task(engine.search(q))
    disconnect_task = asyncio.create_task(_wait_for_disconnect(request))
    try:
        await asyncio.wait({search_task, disconnect_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (search_task, disconnect_task):
            if not task.done():
                task.cancel()
        await asyncio.gather(search_task, disconnect_task, return_exceptions=True)

    if search_task.cancelled():
        return None
    return search_task.result()


async def _wait_for_disconnect(request: Request) -> None:
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return
