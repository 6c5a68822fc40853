"""Search API endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.api.schemas import (
    ErrorResponse,
    EventHit,
    FacetAggregations,
    SearchRequest,
    SearchResponse,
)
from src.search.client import SearchClient
from src.search.errors import MalformedResponse, SearchBackendError
from src.search.facets import normalize_aggregations
from src.search.query import build_facets_body, build_search_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/opensearch", tags=["search"])


def get_search_client(request: Request) -> SearchClient:
    """Return the process-wide search client created at startup."""
    return request.app.state.search_client


def error_response(
    message: str, error: Exception, status: str | None = None
) -> JSONResponse:
    """Build the 500 payload shared by all endpoints."""
    payload = ErrorResponse(status=status, message=message, error=str(error))
    return JSONResponse(status_code=500, content=payload.model_dump(exclude_none=True))


def parse_hits(response: dict) -> list[EventHit]:
    """Extract hits in the order OpenSearch returned them.

    Entries that are not hits at all (no ``_id``) are skipped; a ``hits``
    section of the wrong type is a malformed response.
    """
    section = response.get("hits")
    if section is None:
        return []
    if not isinstance(section, dict):
        raise MalformedResponse(f"unexpected hits section: {type(section).__name__}")
    hits = section.get("hits") or []
    if not isinstance(hits, list):
        raise MalformedResponse(f"unexpected hits list: {type(hits).__name__}")

    parsed = []
    for hit in hits:
        try:
            parsed.append(EventHit.model_validate(hit))
        except ValidationError as e:
            logger.warning("Skipping malformed hit", extra={"error": str(e)})
    return parsed


@router.post(
    "/search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
    summary="Search events",
)
async def search_events(
    payload: SearchRequest | None = None,
    search_client: SearchClient = Depends(get_search_client),
):
    """
    Search events with full-text search and faceted filtering.

    - **Full-text search**: Fuzzy match over name, category and location
    - **Filters**: Price range, categories and locations narrow the results
    - **Aggregations**: Facet counts computed over the filtered results

    Returns up to 20 events sorted by relevance score.
    """
    payload = payload or SearchRequest()
    filters = payload.filters
    body = build_search_body(
        payload.query,
        price_range=filters.price_range if filters else None,
        categories=filters.categories if filters else None,
        locations=filters.locations if filters else None,
    )

    try:
        response = await run_in_threadpool(search_client.search, body)
        hits = parse_hits(response)
    except SearchBackendError as e:
        logger.error("Error querying OpenSearch", extra={"error": str(e)})
        return error_response("Error querying OpenSearch", e)

    return SearchResponse(
        hits=hits,
        aggregations=normalize_aggregations(response.get("aggregations")),
    )


@router.post(
    "/facets",
    response_model=FacetAggregations,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
    summary="Get filter options",
)
async def get_facets(search_client: SearchClient = Depends(get_search_client)):
    """
    Get facet values over the whole catalog, ignoring any filters.

    Returns:
    - **price_ranges**: Price bands (<500, 500-2000, 2000-4000)
    - **categories**: Top 10 categories with event counts
    - **locations**: Top 10 locations with event counts
    """
    try:
        response = await run_in_threadpool(search_client.search, build_facets_body())
    except SearchBackendError as e:
        logger.error("Error querying OpenSearch facets", extra={"error": str(e)})
        return error_response("Error querying OpenSearch facets", e)

    return normalize_aggregations(response.get("aggregations"))
