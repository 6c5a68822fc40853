"""OpenSearch query building for event search."""

from collections.abc import Iterable

from src.search.constants import (
    CATEGORY_FIELD,
    LOCATION_FIELD,
    PAGE_SIZE,
    PRICE_FIELD,
    TEXT_FIELDS,
    build_facet_aggs,
)


def _terms_values(values: Iterable[str] | None) -> list[str]:
    """De-duplicate and sort term values so output does not depend on input order."""
    return sorted({v for v in (values or []) if v})


def build_search_query(
    q: str | None,
    price_range: tuple[float, float] | None = None,
    categories: Iterable[str] | None = None,
    locations: Iterable[str] | None = None,
) -> dict:
    """Build the bool query from free text and filters.

    Filters narrow the candidate set without affecting scoring. Without text
    the query matches every event; text that is only whitespace counts as
    no text.
    """
    q = (q or "").strip()
    if q:
        # Fuzzy full-text search
        must = [
            {
                "multi_match": {
                    "query": q,
                    "fields": list(TEXT_FIELDS),
                    "type": "best_fields",
                    "fuzziness": "AUTO",
                }
            }
        ]
    else:
        must = [{"match_all": {}}]

    filter_clauses = []

    # Price range filter (inclusive bounds)
    if price_range is not None:
        low, high = price_range
        filter_clauses.append({"range": {PRICE_FIELD: {"gte": low, "lte": high}}})

    # Category filter (any of the selected values)
    category_values = _terms_values(categories)
    if category_values:
        filter_clauses.append({"terms": {CATEGORY_FIELD: category_values}})

    # Location filter (any of the selected values)
    location_values = _terms_values(locations)
    if location_values:
        filter_clauses.append({"terms": {LOCATION_FIELD: location_values}})

    return {"bool": {"must": must, "filter": filter_clauses}}


def build_search_body(
    q: str | None,
    price_range: tuple[float, float] | None = None,
    categories: Iterable[str] | None = None,
    locations: Iterable[str] | None = None,
) -> dict:
    """Build the complete results request: query, page size and facet aggregations."""
    return {
        "size": PAGE_SIZE,
        "query": build_search_query(q, price_range, categories, locations),
        "aggs": build_facet_aggs(),
    }


def build_facets_body() -> dict:
    """Build the filter-blind facets request over the whole catalog."""
    return {"size": 0, "aggs": build_facet_aggs()}
