"""Normalization of OpenSearch aggregation output into facet buckets."""

import logging
from typing import Any

from pydantic import ValidationError

from src.api.schemas import FacetAggregations, FacetBucket
from src.search.constants import FACET_DIMENSIONS

logger = logging.getLogger(__name__)


def _buckets(raw: Any, dimension: str) -> list[FacetBucket]:
    """Read one dimension's buckets, defaulting to an empty list."""
    if not isinstance(raw, dict):
        return []
    agg = raw.get(dimension)
    if not isinstance(agg, dict):
        return []
    buckets = agg.get("buckets")
    if not isinstance(buckets, list):
        return []

    parsed = []
    for b in buckets:
        try:
            parsed.append(FacetBucket.model_validate(b))
        except ValidationError:
            logger.debug(
                "Skipping malformed bucket", extra={"dimension": dimension}
            )
    return parsed


def normalize_aggregations(raw: Any) -> FacetAggregations:
    """Turn raw aggregation output into all three facet dimensions.

    Missing, null or malformed parts become empty lists. Buckets keep the
    order and counts OpenSearch returned, including zero counts.
    """
    return FacetAggregations(
        **{dimension: _buckets(raw, dimension) for dimension in FACET_DIMENSIONS}
    )
