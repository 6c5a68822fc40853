"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EventSource(BaseModel):
    """Stored event payload."""

    eventName: str | None = Field(
        None,
        description="Event name",
        json_schema_extra={"example": "Jazz Night"},
    )
    category: str | None = Field(
        None,
        description="Event category",
        json_schema_extra={"example": "Music"},
    )
    location: str | None = Field(
        None,
        description="Event location",
        json_schema_extra={"example": "Berlin"},
    )
    price: float | None = Field(
        None, description="Ticket price", json_schema_extra={"example": 750}
    )


class StoredEvent(BaseModel):
    """Event payload as returned by OpenSearch.

    Stored documents are passed through as-is: unknown fields are kept and
    price is not coerced, so a document indexed by other tooling never breaks
    a results page.
    """

    model_config = ConfigDict(extra="allow")

    eventName: str | None = Field(None, description="Event name")
    category: str | None = Field(None, description="Event category")
    location: str | None = Field(None, description="Event location")
    price: int | float | str | None = Field(None, description="Ticket price as stored")


class EventHit(BaseModel):
    """Event in search results, in OpenSearch hit shape."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Document identifier")
    index: str | None = Field(None, alias="_index", description="Source index")
    score: float | None = Field(None, alias="_score", description="Relevance score")
    source: StoredEvent = Field(
        default_factory=StoredEvent, alias="_source", description="Event payload"
    )


class FacetBucket(BaseModel):
    """A single facet value with count."""

    model_config = ConfigDict(populate_by_name=True)

    key: str | int | float = Field(
        ...,
        description="Facet value (category, location or price band key)",
        json_schema_extra={"example": "Music"},
    )
    doc_count: int = Field(
        0,
        description="Number of events with this value",
        json_schema_extra={"example": 12},
    )
    from_value: float | None = Field(
        None, alias="from", description="Lower bound of a price band (inclusive)"
    )
    to_value: float | None = Field(
        None, alias="to", description="Upper bound of a price band (exclusive)"
    )


class FacetAggregations(BaseModel):
    """Facet buckets for the three filter dimensions."""

    price_ranges: list[FacetBucket] = Field(
        default=[], description="Price bands with event counts"
    )
    categories: list[FacetBucket] = Field(
        default=[], description="Top categories with event counts"
    )
    locations: list[FacetBucket] = Field(
        default=[], description="Top locations with event counts"
    )


class SearchFilters(BaseModel):
    """Structured filters applied on top of the text query."""

    model_config = ConfigDict(populate_by_name=True)

    price_range: tuple[float, float] | None = Field(
        None,
        alias="priceRange",
        description="Inclusive [low, high] price bounds",
        json_schema_extra={"example": [500, 2000]},
    )
    categories: list[str] = Field(
        default=[],
        description="Match events in any of these categories",
        json_schema_extra={"example": ["Music"]},
    )
    locations: list[str] = Field(
        default=[],
        description="Match events in any of these locations",
        json_schema_extra={"example": ["Berlin"]},
    )

    @model_validator(mode="after")
    def check_price_range(self) -> "SearchFilters":
        if self.price_range is not None:
            low, high = self.price_range
            if low < 0 or low > high:
                raise ValueError("priceRange must satisfy 0 <= low <= high")
        return self


class SearchRequest(BaseModel):
    """Search request body."""

    query: str | None = Field(
        None, description="Free-text query", json_schema_extra={"example": "jazz"}
    )
    filters: SearchFilters | None = Field(None, description="Structured filters")


class SearchResponse(BaseModel):
    """Search results with facet aggregations."""

    hits: list[EventHit] = Field(..., description="Matching events in relevance order")
    aggregations: FacetAggregations = Field(
        ..., description="Facet counts for the filtered result set"
    )


class HealthResponse(BaseModel):
    """OpenSearch connectivity status."""

    status: str = Field(..., json_schema_extra={"example": "ok"})
    opensearch: str = Field(..., json_schema_extra={"example": "connected"})
    version: str = Field(..., description="OpenSearch version number")


class ErrorResponse(BaseModel):
    """Error payload returned with status 500."""

    status: str | None = Field(None, json_schema_extra={"example": "error"})
    message: str = Field(..., description="Human-readable summary")
    error: str = Field(..., description="Underlying error message")
