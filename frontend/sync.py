"""Search session: keeps filter state, results and facets in sync.

All work happens on one asyncio event loop. Results fetches are numbered when
issued; a response is applied only if no newer fetch was issued in the
meantime, so the most recently issued fetch wins regardless of which response
arrives last.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from frontend.api_client import APIClient, FetchError
from frontend.config import settings
from frontend.state import (
    ActiveFilterBadge,
    FilterAction,
    FilterState,
    derive_badges,
    reduce,
    removal_action,
    to_search_request,
)
from src.api.schemas import EventHit, FacetAggregations

logger = logging.getLogger(__name__)

ErrorListener = Callable[[FetchError], None]


class SearchSession:
    """State of one user's search, from mount until the session ends."""

    def __init__(self, api: APIClient, live_facets: bool = False):
        """Create a session with default filters.

        Args:
            api: Backend client, held for the lifetime of the session
            live_facets: Replace facets with the filtered aggregations of each
                applied results response instead of keeping the catalog-wide
                facets fetched at mount
        """
        self.api = api
        self.live_facets = live_facets
        self.state = FilterState()
        self.badges: list[ActiveFilterBadge] = derive_badges(self.state)
        self.results: list[EventHit] = []
        self.facets: FacetAggregations | None = None
        self.results_error: FetchError | None = None
        self.facets_error: FetchError | None = None
        self._results_seq = 0
        self._pending: set[asyncio.Task] = set()
        self._error_listeners: list[ErrorListener] = []

    @property
    def error(self) -> FetchError | None:
        """The current fetch failure, if any."""
        return self.results_error or self.facets_error

    def on_error(self, listener: ErrorListener) -> None:
        """Register a callback invoked for every failure that is reported."""
        self._error_listeners.append(listener)

    def _report(self, error: FetchError) -> None:
        logger.warning(
            "Fetch failed", extra={"kind": error.kind, "error": error.message}
        )
        for listener in self._error_listeners:
            listener(error)

    async def mount(self) -> None:
        """Initial load: catalog-wide facets plus results for the default state."""
        await asyncio.gather(self._fetch_facets(), self._issue_results_fetch())

    def dispatch(self, action: FilterAction) -> asyncio.Task | None:
        """Apply a user action and fetch results for the new state.

        Returns the scheduled fetch, or None if the action left the state
        unchanged. Facets are not re-fetched.
        """
        new_state = reduce(self.state, action)
        if new_state == self.state:
            return None

        self.state = new_state
        self.badges = derive_badges(new_state)

        task = asyncio.create_task(self._issue_results_fetch())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def remove_badge(self, badge: ActiveFilterBadge) -> asyncio.Task | None:
        """Dismiss a badge; same transition as unchecking its filter control."""
        return self.dispatch(removal_action(badge))

    async def settle(self) -> None:
        """Wait for all results fetches issued so far."""
        while self._pending:
            await asyncio.gather(*self._pending)

    async def close(self) -> None:
        """Wait for outstanding fetches, then release the API client."""
        await self.settle()
        await self.api.close()

    def _issue_results_fetch(self) -> Coroutine[Any, Any, None]:
        # Number and snapshot the request now, at issue time
        self._results_seq += 1
        return self._fetch_results(self._results_seq, to_search_request(self.state))

    async def _fetch_results(self, seq: int, body: dict) -> None:
        try:
            response = await self.api.search(body)
        except FetchError as e:
            if seq != self._results_seq:
                logger.debug("Ignoring failure of superseded fetch", extra={"seq": seq})
                return
            self.results_error = e
            self._report(e)
            return

        if seq != self._results_seq:
            logger.debug(
                "Discarding stale results",
                extra={"seq": seq, "latest": self._results_seq},
            )
            return

        self.results = response.hits
        self.results_error = None
        if self.live_facets:
            self.facets = response.aggregations

    async def _fetch_facets(self) -> None:
        try:
            facets = await self.api.get_facets()
        except FetchError as e:
            self.facets_error = e
            self._report(e)
            return

        self.facets = facets
        self.facets_error = None


def create_session(live_facets: bool = False) -> SearchSession:
    """Create a session against the configured backend API."""
    api = APIClient(base_url=settings.api_base_url, timeout=settings.request_timeout)
    return SearchSession(api, live_facets=live_facets)
