"""Tests for the debounced ticker autocomplete state machine."""

from insider_tracker.models import SuggestionItem
from insider_tracker.session.autocomplete import AutocompleteController

AAPL = SuggestionItem(symbol="AAPL", description="APPLE INC")
AMZN = SuggestionItem(symbol="AMZN", description="AMAZON.COM INC")


def _controller(scheduler, debounce=0.3, initial=""):
    fired = []
    ctl = AutocompleteController(
        scheduler,
        lambda q, seq: fired.append((q, seq, scheduler.now)),
        debounce_seconds=debounce,
        initial=initial,
    )
    return ctl, fired


class TestInput:
    def test_keystroke_updates_both_values_upper_cased(self, scheduler):
        ctl, _ = _controller(scheduler)
        ctl.on_input("aa")
        assert ctl.live_input == "AA"
        assert ctl.confirmed_ticker == "AA"

    def test_no_request_before_window_elapses(self, scheduler):
        ctl, fired = _controller(scheduler)
        ctl.on_input("A")
        scheduler.advance(0.29)
        assert fired == []
        scheduler.advance(0.02)
        assert [(q, seq) for q, seq, _ in fired] == [("A", 1)]

    def test_burst_fires_once_from_last_keystroke(self, scheduler):
        ctl, fired = _controller(scheduler, debounce=0.5)
        for t, text in [(0.0, "A"), (0.1, "AA"), (0.15, "AAP"), (0.45, "AAPL")]:
            scheduler.advance_to(t)
            ctl.on_input(text)
        scheduler.advance_to(0.94)
        assert fired == []
        scheduler.advance_to(2.0)
        assert len(fired) == 1
        query, seq, at = fired[0]
        assert query == "AAPL"
        assert seq == 1
        assert 0.94 < at < 0.96

    def test_single_pending_timer(self, scheduler):
        ctl, _ = _controller(scheduler)
        for text in ["T", "TS", "TSL", "TSLA"]:
            ctl.on_input(text)
            assert len(scheduler.pending) == 1
        assert ctl.timer_pending

    def test_debounce_interval_is_configurable(self, scheduler):
        ctl, fired = _controller(scheduler, debounce=0.5)
        ctl.on_input("M")
        scheduler.advance(0.4)
        assert fired == []
        scheduler.advance(0.2)
        assert len(fired) == 1


class TestEmptyInput:
    def test_clearing_mid_debounce_makes_no_request(self, scheduler):
        ctl, fired = _controller(scheduler)
        ctl.on_input("AA")
        scheduler.advance(0.1)
        ctl.on_input("   ")
        assert ctl.suggestions == []
        scheduler.advance(5)
        assert fired == []
        assert scheduler.pending == []

    def test_clearing_drops_visible_suggestions_immediately(self, scheduler):
        ctl, _ = _controller(scheduler)
        ctl.on_input("A")
        scheduler.advance(0.3)
        ctl.apply_suggestions(ctl.last_seq, [AAPL, AMZN])
        assert ctl.suggestions == [AAPL, AMZN]
        ctl.on_input("")
        assert ctl.suggestions == []
        assert ctl.confirmed_ticker == ""


class TestResponses:
    def test_response_replaces_suggestions(self, scheduler):
        ctl, _ = _controller(scheduler)
        ctl.on_input("A")
        scheduler.advance(0.3)
        assert ctl.apply_suggestions(1, [AAPL, AMZN])
        assert ctl.suggestions == [AAPL, AMZN]

    def test_empty_response_clears(self, scheduler):
        ctl, _ = _controller(scheduler)
        ctl.on_input("A")
        scheduler.advance(0.3)
        ctl.apply_suggestions(1, [AAPL])
        ctl.on_input("AX")
        scheduler.advance(0.3)
        assert ctl.apply_suggestions(2, [])
        assert ctl.suggestions == []

    def test_older_response_is_dropped(self, scheduler):
        ctl, _ = _controller(scheduler)
        ctl.on_input("A")
        scheduler.advance(0.3)
        ctl.on_input("AM")
        scheduler.advance(0.3)
        assert ctl.apply_suggestions(2, [AMZN])
        assert not ctl.apply_suggestions(1, [AAPL])
        assert ctl.suggestions == [AMZN]

    def test_late_response_after_clear_is_dropped(self, scheduler):
        ctl, _ = _controller(scheduler)
        ctl.on_input("A")
        scheduler.advance(0.3)
        ctl.on_input("")
        assert not ctl.apply_suggestions(1, [AAPL])
        assert ctl.suggestions == []

    def test_late_response_while_typing_is_dropped(self, scheduler):
        ctl, _ = _controller(scheduler)
        ctl.on_input("A")
        scheduler.advance(0.3)
        ctl.on_input("AM")
        assert not ctl.apply_suggestions(1, [AAPL])
        assert ctl.suggestions == []


class TestSelectAndSubmit:
    def test_select_sets_both_and_clears(self, scheduler):
        ctl, _ = _controller(scheduler)
        ctl.on_input("APP")
        scheduler.advance(0.3)
        ctl.apply_suggestions(1, [AAPL])
        ctl.select(AAPL)
        assert ctl.live_input == "AAPL"
        assert ctl.confirmed_ticker == "AAPL"
        assert ctl.suggestions == []
        assert not ctl.timer_pending

    def test_select_ignores_response_still_in_flight(self, scheduler):
        ctl, _ = _controller(scheduler)
        ctl.on_input("AM")
        scheduler.advance(0.3)
        ctl.select(AMZN)
        assert not ctl.apply_suggestions(1, [AMZN])
        assert ctl.suggestions == []

    def test_submit_clears_and_resyncs(self, scheduler):
        ctl, _ = _controller(scheduler, initial="aapl")
        assert ctl.live_input == "AAPL"
        ctl.on_input("msft")
        ctl.live_input = "MSF"  # text box edited without a change event
        assert ctl.submit() == "MSFT"
        assert ctl.live_input == "MSFT"
        assert ctl.suggestions == []
        assert not ctl.timer_pending
