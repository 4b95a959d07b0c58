from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional, Protocol, Sequence

from insider_tracker.models import SuggestionItem


def _debug(msg: str) -> None:
    print(f"[autocomplete] {msg}")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with asyncio's loop.call_later signature."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class LoopScheduler:
    """Schedules on whichever asyncio loop is running at call time."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback, *args)


FireCallback = Callable[[str, int], None]


class AutocompleteController:
    """Ticker box state: live text, confirmed ticker and the suggestion list.

    Every keystroke restarts a single debounce timer; when the timer survives
    the quiet period, `on_fire(query, seq)` is called. The caller performs the
    request and reports back through `apply_suggestions(seq, items)`.

    Requests are numbered. A response is applied only if it answers the latest
    request and nothing changed the input since that request fired, so a slow
    response can never overwrite newer state.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_fire: FireCallback,
        *,
        debounce_seconds: float = 0.3,
        initial: str = "",
    ) -> None:
        self._scheduler = scheduler
        self._on_fire = on_fire
        self.debounce_seconds = float(debounce_seconds)

        value = (initial or "").upper()
        self.live_input: str = value
        self.confirmed_ticker: str = value
        self.suggestions: List[SuggestionItem] = []

        self._timer: Optional[TimerHandle] = None
        self._last_seq: int = 0
        # seq of the request whose answer is still wanted; None once stale.
        self._awaiting_seq: Optional[int] = None

    # -----------------------------
    # Timer slot
    # -----------------------------

    @property
    def timer_pending(self) -> bool:
        return self._timer is not None

    @property
    def last_seq(self) -> int:
        return self._last_seq

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _restart_timer(self) -> None:
        self._cancel_timer()
        self._timer = self._scheduler.call_later(self.debounce_seconds, self._fire)

    def _fire(self) -> None:
        self._timer = None
        query = self.live_input
        if not query.strip():
            self.suggestions = []
            return
        self._last_seq += 1
        self._awaiting_seq = self._last_seq
        _debug(f"Fetching suggestions for {query!r} seq={self._last_seq}")
        self._on_fire(query, self._last_seq)

    # -----------------------------
    # User events
    # -----------------------------

    def on_input(self, text: str) -> None:
        value = (text or "").upper()
        self.live_input = value
        # The raw text is also what a plain submit will search for.
        self.confirmed_ticker = value
        self._awaiting_seq = None

        if not value.strip():
            self._cancel_timer()
            self.suggestions = []
            return
        self._restart_timer()

    def select(self, item: SuggestionItem) -> None:
        self._cancel_timer()
        self._awaiting_seq = None
        self.confirmed_ticker = item.symbol
        self.live_input = item.symbol
        self.suggestions = []

    def submit(self) -> str:
        """Hide suggestions and resync the text box with the confirmed ticker."""
        self._cancel_timer()
        self._awaiting_seq = None
        self.suggestions = []
        self.live_input = self.confirmed_ticker
        return self.confirmed_ticker

    # -----------------------------
    # Responses
    # -----------------------------

    def apply_suggestions(self, seq: int, items: Sequence[SuggestionItem] | None) -> bool:
        """Install a response. Returns False when the response was stale and dropped."""
        if seq != self._awaiting_seq or seq != self._last_seq:
            _debug(f"Dropping stale suggestions seq={seq} latest={self._last_seq}")
            return False
        self._awaiting_seq = None
        self.suggestions = list(items or [])
        return True
