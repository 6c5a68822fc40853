"""Shared search constants for facets and filtering."""

# Fixed page size for result queries (no pagination)
PAGE_SIZE = 20

# Number of terms buckets returned per facet dimension
FACET_SIZE = 10

# Facet dimensions, in response order
FACET_DIMENSIONS: tuple[str, ...] = ("price_ranges", "categories", "locations")

# Full-text fields with boosts (name > category > location)
TEXT_FIELDS: list[str] = ["eventName.analyzed^3", "category.analyzed^2", "location"]

# Exact-match fields used by terms filters and terms aggregations
PRICE_FIELD = "price"
CATEGORY_FIELD = "category.keyword"
LOCATION_FIELD = "location.keyword"

# Price band definitions (no catch-all above the last band)
PRICE_BANDS: list[dict[str, int | None]] = [
    {"from": None, "to": 500},
    {"from": 500, "to": 2000},
    {"from": 2000, "to": 4000},
]


def build_price_band_aggs() -> dict:
    """Build price band range aggregation on the event price."""
    ranges = []
    for band in PRICE_BANDS:
        r = {}
        if band["from"] is not None:
            r["from"] = band["from"]
        if band["to"] is not None:
            r["to"] = band["to"]
        ranges.append(r)
    return {"range": {"field": PRICE_FIELD, "ranges": ranges}}


def build_facet_aggs() -> dict:
    """Build the aggregation block shared by result and facet queries."""
    return {
        "price_ranges": build_price_band_aggs(),
        "categories": {"terms": {"field": CATEGORY_FIELD, "size": FACET_SIZE}},
        "locations": {"terms": {"field": LOCATION_FIELD, "size": FACET_SIZE}},
    }
