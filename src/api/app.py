"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes.search import error_response, get_search_client
from src.api.routes.search import router as search_router
from src.api.schemas import ErrorResponse, HealthResponse
from src.search.client import SearchClient
from src.search.errors import SearchBackendError

logger = logging.getLogger(__name__)

DESCRIPTION = """
## Event Search API

Search a catalog of events stored in OpenSearch.

### Features

* **Full-text search** - Fuzzy matching across event name, category and location
* **Faceted filtering** - Filter by price range, categories and locations
* **Facets** - Price bands, top categories and top locations with counts
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    search_client = SearchClient()
    app.state.search_client = search_client
    logger.info("OpenSearch URL", extra={"url": search_client.url})

    # Test the connection on startup; the API still starts if it fails
    try:
        version = await run_in_threadpool(search_client.version)
        logger.info("Connected to OpenSearch", extra={"version": version})
    except SearchBackendError as e:
        logger.warning(
            "Could not connect to OpenSearch",
            extra={"url": search_client.url, "error": str(e)},
        )

    yield

    search_client.close()


app = FastAPI(
    title="Event Search API",
    description=DESCRIPTION,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "search",
            "description": "Event search and facet operations",
        },
        {
            "name": "health",
            "description": "OpenSearch connectivity",
        },
    ],
    license_info={
        "name": "MIT",
    },
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routes
app.include_router(search_router)


@app.get(
    "/api/health",
    response_model=HealthResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["health"],
)
async def health_check(search_client: SearchClient = Depends(get_search_client)):
    """Health check endpoint reporting the OpenSearch version."""
    try:
        version = await run_in_threadpool(search_client.version)
    except SearchBackendError as e:
        logger.error("OpenSearch health check failed", extra={"error": str(e)})
        return error_response("Could not connect to OpenSearch", e, status="error")

    return HealthResponse(status="ok", opensearch="connected", version=version)
