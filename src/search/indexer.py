"""Index events from a JSON Lines file into OpenSearch."""

import json
import sys
from collections.abc import Iterator

from opensearchpy.helpers import bulk

from src.api.schemas import EventSource
from src.search.client import SearchClient

BATCH_SIZE = 1000


def event_to_doc(data: dict, index: str) -> dict:
    """Convert a JSON record to an OpenSearch bulk action.

    The record's ``id`` (if any) becomes the document ID; the payload is
    validated against the event schema so bad prices fail here rather than
    at index time.
    """
    source = EventSource.model_validate(data)
    doc = {"_index": index, **source.model_dump(exclude_none=True)}
    if data.get("id") is not None:
        doc["_id"] = str(data["id"])
    return doc


def read_events(path: str) -> Iterator[dict]:
    """Yield records from a JSON Lines file, skipping blank lines."""
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                yield json.loads(line)


def index_events(
    search_client: SearchClient, path: str, recreate_index: bool = True
) -> int:
    """
    Index all events from a JSON Lines file.

    Returns the number of documents indexed.
    """
    search_client.create_index(delete_existing=recreate_index)

    count = 0
    batch: list[dict] = []
    for record in read_events(path):
        batch.append(event_to_doc(record, search_client.index))
        if len(batch) >= BATCH_SIZE:
            count += _flush(search_client, batch)
            batch = []
    if batch:
        count += _flush(search_client, batch)

    search_client.refresh()
    return count


def _flush(search_client: SearchClient, docs: list[dict]) -> int:
    success, errors = bulk(search_client.raw, docs, raise_on_error=False)
    if errors:
        print(f"  Errors in batch: {len(errors)}", file=sys.stderr)
        print(f"  First error: {errors[0]}", file=sys.stderr)
    print(f"Indexed {success:,} documents...", file=sys.stderr)
    return success


def main() -> None:
    """CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Index events to OpenSearch")
    parser.add_argument("path", help="JSON Lines file with one event per line")
    parser.add_argument(
        "--no-recreate",
        action="store_true",
        help="Don't recreate the index (append to existing)",
    )
    args = parser.parse_args()

    search_client = SearchClient()
    print(f"Indexing {args.path} -> {search_client.index}", file=sys.stderr)
    try:
        count = index_events(
            search_client, args.path, recreate_index=not args.no_recreate
        )
    finally:
        search_client.close()

    print(f"Done. Indexed {count:,} events.", file=sys.stderr)


if __name__ == "__main__":
    main()
