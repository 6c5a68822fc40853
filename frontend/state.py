"""Filter state for an event search session.

Every transition returns a new ``FilterState``; published states are never
modified, so older references stay valid for diffing. Active-filter badges are
derived from the state on demand and never stored.
"""

from dataclasses import dataclass, field, replace
from typing import Literal

DEFAULT_PRICE_RANGE: tuple[float, float] = (0, 5000)

BadgeType = Literal["search", "category", "location", "price"]


@dataclass(frozen=True)
class FilterState:
    """The user's current search intent."""

    search_query: str = ""
    price_range: tuple[float, float] = DEFAULT_PRICE_RANGE
    categories: frozenset[str] = field(default_factory=frozenset)
    locations: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        low, high = self.price_range
        if low < 0 or low > high:
            raise ValueError(
                f"Invalid price range {self.price_range}: need 0 <= low <= high"
            )


# Actions


@dataclass(frozen=True)
class SetSearchText:
    text: str


@dataclass(frozen=True)
class ToggleCategory:
    value: str
    included: bool


@dataclass(frozen=True)
class ToggleLocation:
    value: str
    included: bool


@dataclass(frozen=True)
class SetPriceRange:
    low: float
    high: float


FilterAction = SetSearchText | ToggleCategory | ToggleLocation | SetPriceRange


def _toggle(values: frozenset[str], value: str, included: bool) -> frozenset[str]:
    return values | {value} if included else values - {value}


def reduce(state: FilterState, action: FilterAction) -> FilterState:
    """Apply one user action to the filter state.

    Toggles are idempotent: adding a present value or removing an absent one
    yields an equal state. Raises ``ValueError`` for an invalid price range.
    """
    if isinstance(action, SetSearchText):
        return replace(state, search_query=action.text)
    if isinstance(action, ToggleCategory):
        return replace(
            state, categories=_toggle(state.categories, action.value, action.included)
        )
    if isinstance(action, ToggleLocation):
        return replace(
            state, locations=_toggle(state.locations, action.value, action.included)
        )
    if isinstance(action, SetPriceRange):
        return replace(state, price_range=(action.low, action.high))
    raise TypeError(f"Unknown filter action: {action!r}")


# Badges


@dataclass(frozen=True)
class ActiveFilterBadge:
    """One removable token for an applied filter component."""

    type: BadgeType
    label: str
    value: str = ""


def _format_price(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else f"{amount:.2f}"


def derive_badges(state: FilterState) -> list[ActiveFilterBadge]:
    """Build badges for every non-default part of the state.

    Order: search text, categories, locations (both sorted), price.
    """
    badges = []

    text = state.search_query.strip()
    if text:
        badges.append(ActiveFilterBadge("search", f'"{text}"', state.search_query))

    for category in sorted(state.categories):
        badges.append(ActiveFilterBadge("category", category, category))

    for location in sorted(state.locations):
        badges.append(ActiveFilterBadge("location", location, location))

    if state.price_range != DEFAULT_PRICE_RANGE:
        low, high = state.price_range
        label = f"${_format_price(low)} - ${_format_price(high)}"
        badges.append(ActiveFilterBadge("price", label))

    return badges


def removal_action(badge: ActiveFilterBadge) -> FilterAction:
    """Map a badge's dismiss control to the action its filter control would emit."""
    if badge.type == "category":
        return ToggleCategory(badge.value, included=False)
    if badge.type == "location":
        return ToggleLocation(badge.value, included=False)
    if badge.type == "search":
        return SetSearchText("")
    if badge.type == "price":
        return SetPriceRange(*DEFAULT_PRICE_RANGE)
    raise ValueError(f"Unknown badge type: {badge.type!r}")


def to_search_request(state: FilterState) -> dict:
    """Build the search API request body for a state.

    The price range is sent only when it differs from the default, so the
    backend applies a price filter exactly when a price badge is shown.
    """
    filters: dict = {
        "categories": sorted(state.categories),
        "locations": sorted(state.locations),
    }
    if state.price_range != DEFAULT_PRICE_RANGE:
        filters["priceRange"] = list(state.price_range)
    return {"query": state.search_query, "filters": filters}
