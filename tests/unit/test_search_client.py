"""Unit tests for SearchClient error translation."""

from unittest.mock import MagicMock

import pytest
from opensearchpy.exceptions import ConnectionError, ConnectionTimeout, RequestError

from src.config import Settings
from src.search.client import SearchClient
from src.search.errors import (
    MalformedResponse,
    SearchBackendError,
    UpstreamQueryRejected,
    UpstreamUnavailable,
)
from src.search.mapping import INDEX_SETTINGS


@pytest.fixture
def opensearch():
    return MagicMock()


@pytest.fixture
def search_client(opensearch):
    config = Settings(opensearch_index="test_events")
    return SearchClient(config=config, client=opensearch)


@pytest.mark.unit
class TestSearch:
    """Tests for SearchClient.search."""

    def test_targets_configured_index(self, search_client, opensearch):
        opensearch.search.return_value = {"hits": {"hits": []}}
        body = {"size": 0}
        assert search_client.search(body) == {"hits": {"hits": []}}
        opensearch.search.assert_called_once_with(index="test_events", body=body)

    def test_connection_refused(self, search_client, opensearch):
        opensearch.search.side_effect = ConnectionError(
            "N/A", "connection refused", Exception("refused")
        )
        with pytest.raises(UpstreamUnavailable):
            search_client.search({})

    def test_timeout(self, search_client, opensearch):
        opensearch.search.side_effect = ConnectionTimeout(
            "TIMEOUT", "timed out", Exception("read timeout")
        )
        with pytest.raises(UpstreamUnavailable):
            search_client.search({})

    def test_rejected_query(self, search_client, opensearch):
        opensearch.search.side_effect = RequestError(
            400, "parsing_exception", {"error": "unknown query [bogus]"}
        )
        with pytest.raises(UpstreamQueryRejected) as exc_info:
            search_client.search({})
        assert exc_info.value.status_code == 400
        assert "parsing_exception" in str(exc_info.value)

    def test_non_dict_response(self, search_client, opensearch):
        opensearch.search.return_value = None
        with pytest.raises(MalformedResponse):
            search_client.search({})

    def test_errors_share_base_class(self):
        for error in (UpstreamUnavailable, UpstreamQueryRejected, MalformedResponse):
            assert issubclass(error, SearchBackendError)


@pytest.mark.unit
class TestVersion:
    """Tests for SearchClient.version."""

    def test_version_number(self, search_client, opensearch):
        opensearch.info.return_value = {"version": {"number": "2.11.0"}}
        assert search_client.version() == "2.11.0"

    def test_missing_version(self, search_client, opensearch):
        opensearch.info.return_value = {"cluster_name": "dev"}
        with pytest.raises(MalformedResponse):
            search_client.version()

    def test_unreachable(self, search_client, opensearch):
        opensearch.info.side_effect = ConnectionError("N/A", "refused", Exception())
        with pytest.raises(UpstreamUnavailable):
            search_client.version()


@pytest.mark.unit
class TestCreateIndex:
    """Tests for index creation."""

    def test_creates_missing_index(self, search_client, opensearch):
        opensearch.indices.exists.return_value = False
        search_client.create_index()
        opensearch.indices.create.assert_called_once_with(
            index="test_events", body=INDEX_SETTINGS
        )

    def test_keeps_existing_index(self, search_client, opensearch):
        opensearch.indices.exists.return_value = True
        search_client.create_index()
        opensearch.indices.delete.assert_not_called()
        opensearch.indices.create.assert_not_called()

    def test_recreates_existing_index(self, search_client, opensearch):
        opensearch.indices.exists.return_value = True
        search_client.create_index(delete_existing=True)
        opensearch.indices.delete.assert_called_once_with(index="test_events")
        opensearch.indices.create.assert_called_once()
