"""Display strings for the client panels.

Everything here is pure: it turns classified rows, quote snapshots and flow
states into the text and style classes a view paints. Widgets are out of scope.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from insider_tracker.classify import change_polarity
from insider_tracker.models import ClassifiedTrade, DisclosureDocument, Polarity, QuoteSnapshot, TradeLookup
from insider_tracker.session.state import FlowState

NO_TRADES_MESSAGE = "No transactions match the selected conditions."
FEED_LOADING_MESSAGE = "Loading feed..."
FEED_EMPTY_MESSAGE = "No recent open-market P/S trades."


def style_class(polarity: Polarity) -> str:
    if polarity is Polarity.POSITIVE:
        return "positive"
    if polarity is Polarity.NEGATIVE:
        return "negative"
    return ""


def format_shares(shares: float) -> str:
    """Thousands separators, at most 3 decimals, no trailing zeros."""
    s = f"{float(shares):,.3f}".rstrip("0").rstrip(".")
    return s if s not in ("", "-0") else "0"


def format_price(price: float) -> str:
    return f"${float(price):.2f}"


def format_change(change: float | None, change_percent: float) -> str:
    return f"{(change or 0.0):.2f} ({(change_percent or 0.0):.2f}%)"


def main_table(trades: Sequence[ClassifiedTrade]) -> List[Dict[str, str]]:
    return [
        {
            "key": t.id,
            "reporter": t.reporter_name or "",
            "date": t.transaction_date or "",
            "type": t.type_label,
            "type_class": style_class(t.polarity),
            "shares": format_shares(t.shares),
            "price": format_price(t.price_per_share),
        }
        for t in trades
    ]


def feed_table(trades: Sequence[ClassifiedTrade]) -> List[Dict[str, str]]:
    # The feed only holds P/S, so anything that isn't a buy is drawn as a sell.
    return [
        {
            "key": t.id,
            "ticker": t.issuer_symbol or "",
            "type": t.type_label,
            "type_class": "positive" if t.polarity is Polarity.POSITIVE else "negative",
            "shares": format_shares(t.shares),
            "price": format_price(t.price_per_share),
        }
        for t in trades
    ]


def quote_panel(quote: QuoteSnapshot | None) -> Optional[Dict[str, Any]]:
    """Quote box contents, or None when there is no quote to draw."""
    if quote is None:
        return None
    if quote.error:
        return {"error": f"Failed to load quote: {quote.error}"}
    cls = style_class(change_polarity(quote.change))
    return {
        "current_price": format_price(quote.current_price),
        "current_price_class": cls,
        "change": format_change(quote.change, quote.change_percent),
        "change_class": cls,
        "day_high": format_price(quote.day_high),
        "day_low": format_price(quote.day_low),
    }


def lookup_error_line(state: FlowState[TradeLookup]) -> Optional[str]:
    return f"Search error: {state.error}" if state.error else None


def feed_status(state: FlowState[Sequence[DisclosureDocument]], rows: Sequence[ClassifiedTrade] | None) -> Optional[str]:
    """Message shown in place of the feed table, or None when the table is drawn."""
    if state.error:
        return f"Feed error: {state.error}"
    if state.result is None:
        return FEED_LOADING_MESSAGE
    if not rows:
        return FEED_EMPTY_MESSAGE
    return None
