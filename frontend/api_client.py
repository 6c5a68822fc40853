"""HTTP client for consuming the backend API."""

from typing import Literal

import httpx
from pydantic import ValidationError

from src.api.schemas import FacetAggregations, SearchResponse

FetchErrorKind = Literal["unavailable", "rejected", "malformed"]


class FetchError(Exception):
    """A backend call failed; displayed content should stay as it was."""

    def __init__(self, kind: FetchErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class APIClient:
    """Async HTTP client for the event search backend API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the API client.

        Args:
            base_url: Base URL of the backend API (e.g., http://localhost:3001)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def _request(self, method: str, path: str, json: dict | None = None) -> dict:
        """Make a request and decode the JSON body, mapping failures to FetchError."""
        try:
            response = await self._client.request(
                method, f"{self.base_url}{path}", json=json
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            raise FetchError(
                "rejected", f"{e.response.status_code} from {path}: {detail}"
            ) from e
        except httpx.TransportError as e:
            # Connection failures and timeouts
            raise FetchError("unavailable", f"{path}: {e!r}") from e

        try:
            return response.json()
        except ValueError as e:
            raise FetchError("malformed", f"{path}: invalid JSON body") from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def search(self, body: dict) -> SearchResponse:
        """Search events.

        Args:
            body: Request body with ``query`` and ``filters``

        Returns:
            Hits in relevance order plus filtered aggregations
        """
        data = await self._request("POST", "/api/opensearch/search", json=body)
        try:
            return SearchResponse.model_validate(data)
        except ValidationError as e:
            raise FetchError("malformed", f"search response: {e}") from e

    async def get_facets(self) -> FacetAggregations:
        """Get facet buckets over the whole catalog."""
        data = await self._request("POST", "/api/opensearch/facets")
        try:
            return FacetAggregations.model_validate(data)
        except ValidationError as e:
            raise FetchError("malformed", f"facets response: {e}") from e

    async def health(self) -> dict:
        """Get backend and OpenSearch status."""
        return await self._request("GET", "/api/health")


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and "message" in data:
        return f"{data['message']} ({data.get('error', '')})"
    return response.text
