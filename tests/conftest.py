"""Shared test fixtures."""

import json

import pytest


class FakeSearchClient:
    """Stand-in for SearchClient that records query bodies."""

    index = "events"
    url = "http://opensearch.test:9200"

    def __init__(self, response: dict | None = None, version: str = "2.11.0"):
        self.response = response if response is not None else {}
        self.error: Exception | None = None
        self._version = version
        self.bodies: list[dict] = []

    def search(self, body: dict) -> dict:
        self.bodies.append(body)
        if self.error:
            raise self.error
        return self.response

    def version(self) -> str:
        if self.error:
            raise self.error
        return self._version

    def close(self) -> None:
        pass


@pytest.fixture
def sample_event_json() -> dict:
    """Sample event record as stored in the JSONL seed file."""
    return {
        "id": "evt-1",
        "eventName": "Jazz Night",
        "category": "Music",
        "location": "Berlin",
        "price": 750,
    }


@pytest.fixture
def sample_events_jsonl(sample_event_json: dict, tmp_path) -> str:
    """Create a temporary JSONL file with sample events."""
    file_path = tmp_path / "events.jsonl"
    with open(file_path, "w") as f:
        f.write(json.dumps(sample_event_json) + "\n")
        f.write("\n")
        # Add a second event
        event2 = sample_event_json.copy()
        event2["id"] = "evt-2"
        event2["eventName"] = "Marathon"
        event2["category"] = "Sports"
        event2["price"] = 2500
        f.write(json.dumps(event2) + "\n")
    return str(file_path)


@pytest.fixture
def raw_search_response() -> dict:
    """OpenSearch _search response with hits and all three aggregations."""
    return {
        "took": 3,
        "hits": {
            "total": {"value": 2, "relation": "eq"},
            "hits": [
                {
                    "_index": "events",
                    "_id": "evt-1",
                    "_score": 2.4,
                    "_source": {
                        "eventName": "Jazz Night",
                        "category": "Music",
                        "location": "Berlin",
                        "price": 750,
                    },
                },
                {
                    "_index": "events",
                    "_id": "evt-3",
                    "_score": 1.1,
                    "_source": {
                        "eventName": "Jazz Brunch",
                        "category": "Food",
                        "location": "Hamburg",
                        "price": 40,
                    },
                },
            ],
        },
        "aggregations": {
            "price_ranges": {
                "buckets": [
                    {"key": "*-500.0", "to": 500.0, "doc_count": 1},
                    {"key": "500.0-2000.0", "from": 500.0, "to": 2000.0, "doc_count": 1},
                    {"key": "2000.0-4000.0", "from": 2000.0, "to": 4000.0, "doc_count": 0},
                ]
            },
            "categories": {
                "doc_count_error_upper_bound": 0,
                "sum_other_doc_count": 0,
                "buckets": [
                    {"key": "Food", "doc_count": 1},
                    {"key": "Music", "doc_count": 1},
                ],
            },
            "locations": {
                "buckets": [
                    {"key": "Berlin", "doc_count": 1},
                    {"key": "Hamburg", "doc_count": 1},
                ]
            },
        },
    }


@pytest.fixture
def fake_search_client(raw_search_response: dict) -> FakeSearchClient:
    return FakeSearchClient(response=raw_search_response)
