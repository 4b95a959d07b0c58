from __future__ import annotations

import asyncio
from typing import Any, Awaitable, List, Optional, Protocol, Set, Tuple

from insider_tracker.config import ClientSettings
from insider_tracker.extract import extract_feed, extract_main
from insider_tracker.models import (
    ClassifiedTrade,
    DisclosureDocument,
    FilterMode,
    LookbackPeriod,
    QueryParams,
    QuoteSnapshot,
    SuggestionItem,
    TradeLookup,
)
from insider_tracker.session.autocomplete import AutocompleteController, LoopScheduler, Scheduler
from insider_tracker.session.state import FlowState


def _debug(msg: str) -> None:
    print(f"[session] {msg}")


class TrackerApi(Protocol):
    """What the session needs from the backend (see client.BackendClient)."""

    def search_symbols(self, text: str) -> List[SuggestionItem]: ...

    def fetch_insider_trades(self, query: QueryParams) -> TradeLookup: ...

    def fetch_daily_feed(self) -> Tuple[DisclosureDocument, ...]: ...


class SessionCoordinator:
    """Owns the three independent flows of one client session.

    - search: suggestion requests fired by the autocomplete debounce
    - lookup: insider trades + quote for the submitted query
    - feed: latest P/S trades across all issuers, refreshed on demand

    Must be driven from a single asyncio event loop. Blocking HTTP calls run in
    worker threads; all state changes happen on the loop.
    """

    def __init__(
        self,
        api: TrackerApi,
        settings: ClientSettings | None = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.api = api
        self.settings = settings or ClientSettings()

        self.autocomplete = AutocompleteController(
            scheduler or LoopScheduler(),
            self._on_search_fire,
            debounce_seconds=self.settings.debounce_seconds,
            initial=self.settings.initial_ticker,
        )

        # Selector values; copied into a QueryParams on submit.
        self.period: LookbackPeriod = LookbackPeriod.M12
        self.filter: FilterMode = FilterMode.PS_ONLY
        self.query: Optional[QueryParams] = None

        self.search: FlowState[List[SuggestionItem]] = FlowState()
        self.lookup: FlowState[TradeLookup] = FlowState()
        self.feed: FlowState[Tuple[DisclosureDocument, ...]] = FlowState()

        self._tasks: Set["asyncio.Task[Any]"] = set()

    # -----------------------------
    # Lifecycle
    # -----------------------------

    def start(self) -> None:
        if self.settings.feed_autoload:
            self.refresh_feed()

    async def wait_idle(self) -> None:
        """Wait until no flow has a request in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(self, coro: Awaitable[None]) -> "asyncio.Task[None]":
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    # -----------------------------
    # Ticker box
    # -----------------------------

    def on_input(self, text: str) -> None:
        self.autocomplete.on_input(text)

    def select_suggestion(self, item: SuggestionItem) -> None:
        self.autocomplete.select(item)

    def set_period(self, period: LookbackPeriod | str) -> None:
        self.period = LookbackPeriod(period)

    def set_filter(self, filter_mode: FilterMode | str) -> None:
        self.filter = FilterMode(filter_mode)

    @property
    def live_input(self) -> str:
        return self.autocomplete.live_input

    @property
    def confirmed_ticker(self) -> str:
        return self.autocomplete.confirmed_ticker

    @property
    def suggestions(self) -> List[SuggestionItem]:
        return self.autocomplete.suggestions

    # -----------------------------
    # Search flow
    # -----------------------------

    def _on_search_fire(self, query: str, seq: int) -> None:
        self.search = self.search.started()
        self._spawn(self._run_search(query, seq))

    async def _run_search(self, query: str, seq: int) -> None:
        try:
            items = await asyncio.to_thread(self.api.search_symbols, query)
        except Exception as e:
            # Suggestions are best-effort: log, show nothing.
            _debug(f"Suggestion fetch error for {query!r}: {e}")
            self.search = self.search.failed(str(e))
            self.autocomplete.apply_suggestions(seq, [])
            return
        self.search = self.search.succeeded(list(items or []))
        self.autocomplete.apply_suggestions(seq, items)

    # -----------------------------
    # Trade lookup flow
    # -----------------------------

    def submit(
        self,
        period: LookbackPeriod | str | None = None,
        filter_mode: FilterMode | str | None = None,
    ) -> Optional["asyncio.Task[None]"]:
        """Search the confirmed ticker. Returns None while a lookup is already running."""
        if self.lookup.loading:
            # The press still closes the dropdown; only the request is skipped.
            self.autocomplete.submit()
            _debug("Lookup already in progress; ignoring submit")
            return None
        if period is not None:
            self.set_period(period)
        if filter_mode is not None:
            self.set_filter(filter_mode)

        ticker = self.autocomplete.submit().strip()
        query = QueryParams(ticker=ticker, period=self.period, filter=self.filter)
        self.query = query
        self.lookup = self.lookup.started()

        if not ticker:
            self.lookup = self.lookup.failed("Ticker is blank")
            return None
        return self._spawn(self._run_lookup(query))

    async def _run_lookup(self, query: QueryParams) -> None:
        _debug(f"Lookup ticker={query.ticker} period={query.period.value} filter={query.filter.value}")
        try:
            result = await asyncio.to_thread(self.api.fetch_insider_trades, query)
        except Exception as e:
            _debug(f"Lookup error ticker={query.ticker}: {e}")
            self.lookup = self.lookup.failed(str(e))
            return
        self.lookup = self.lookup.succeeded(result)
        _debug(f"Lookup done ticker={query.ticker} documents={len(result.documents)}")

    @property
    def quote(self) -> Optional[QuoteSnapshot]:
        return self.lookup.result.quote if self.lookup.result is not None else None

    @property
    def main_rows(self) -> Optional[List[ClassifiedTrade]]:
        """Classified rows of the last lookup, or None before any result."""
        if self.lookup.result is None or self.query is None:
            return None
        return extract_main(self.lookup.result.documents, self.query.filter)

    # -----------------------------
    # Feed flow
    # -----------------------------

    def refresh_feed(self) -> Optional["asyncio.Task[None]"]:
        if self.feed.loading:
            _debug("Feed refresh already in progress")
            return None
        self.feed = self.feed.started()
        return self._spawn(self._run_feed())

    async def _run_feed(self) -> None:
        _debug("Fetching daily feed")
        try:
            documents = await asyncio.to_thread(self.api.fetch_daily_feed)
        except Exception as e:
            _debug(f"Feed error: {e}")
            self.feed = self.feed.failed(str(e))
            return
        self.feed = self.feed.succeeded(tuple(documents or ()))

    @property
    def feed_rows(self) -> Optional[List[ClassifiedTrade]]:
        if self.feed.result is None:
            return None
        return extract_feed(self.feed.result)
