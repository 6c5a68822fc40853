"""OpenSearch client setup."""

import logging

from opensearchpy import OpenSearch
from opensearchpy.exceptions import ConnectionError as OpenSearchConnectionError
from opensearchpy.exceptions import TransportError

from src.config import Settings, settings
from src.search.errors import (
    MalformedResponse,
    UpstreamQueryRejected,
    UpstreamUnavailable,
)
from src.search.mapping import INDEX_SETTINGS

logger = logging.getLogger(__name__)


class SearchClient:
    """Process-wide handle on the events index.

    Each call is an independent request; no state is held between calls
    other than the connection pool of the underlying client.
    """

    def __init__(self, config: Settings = settings, client: OpenSearch | None = None):
        self.index = config.opensearch_index
        self.url = config.opensearch_url
        self._client = client or OpenSearch(
            hosts=[config.opensearch_url],
            http_compress=True,
            use_ssl=config.opensearch_use_ssl,
            verify_certs=config.opensearch_verify_certs,
            timeout=config.opensearch_timeout,
        )

    def _call(self, method, **kwargs) -> dict:
        try:
            return method(**kwargs)
        except OpenSearchConnectionError as e:
            # Includes ConnectionTimeout
            raise UpstreamUnavailable(str(e)) from e
        except TransportError as e:
            status = e.status_code if isinstance(e.status_code, int) else None
            raise UpstreamQueryRejected(str(e), status_code=status) from e

    def search(self, body: dict) -> dict:
        """Run a query document against the events index."""
        response = self._call(self._client.search, index=self.index, body=body)
        if not isinstance(response, dict):
            raise MalformedResponse(f"search returned {type(response).__name__}")
        return response

    def version(self) -> str:
        """Return the OpenSearch version number from the root endpoint."""
        info = self._call(self._client.info)
        try:
            return str(info["version"]["number"])
        except (KeyError, TypeError) as e:
            raise MalformedResponse(f"missing version number: {e}") from e

    def create_index(self, delete_existing: bool = False) -> None:
        """Create the events index with mapping."""
        indices = self._client.indices
        if self._call(indices.exists, index=self.index):
            if delete_existing:
                self._call(indices.delete, index=self.index)
            else:
                logger.info(
                    "Index already exists; skipping create "
                    "(set delete_existing=True to recreate)",
                    extra={"index": self.index},
                )
                return

        self._call(indices.create, index=self.index, body=INDEX_SETTINGS)
        logger.info("Created index", extra={"index": self.index})

    def refresh(self) -> None:
        """Make indexed documents searchable."""
        self._call(self._client.indices.refresh, index=self.index)

    @property
    def raw(self) -> OpenSearch:
        """The underlying opensearch-py client, for bulk helpers."""
        return self._client

    def close(self) -> None:
        self._client.close()
