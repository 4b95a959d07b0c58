from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


def _debug(msg: str) -> None:
    print(f"[models] {msg}")


class Polarity(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class FilterMode(str, Enum):
    """Which transaction codes a lookup keeps."""

    PS_ONLY = "PS_ONLY"  # open-market purchases / sales only
    ALL = "ALL"  # also option exercises, gifts, tax withholding, ...


class LookbackPeriod(str, Enum):
    M3 = "3m"
    M6 = "6m"
    M12 = "12m"

    @property
    def months(self) -> int:
        return int(self.value.rstrip("m"))


@dataclass(frozen=True)
class Issuer:
    symbol: str | None
    name: str | None


@dataclass(frozen=True)
class TransactionEntry:
    transaction_date: str | None
    code: str | None
    shares: float = 0.0
    price_per_share: float = 0.0


@dataclass(frozen=True)
class DisclosureDocument:
    """One Form 4 filing as returned by the backend.

    transactions is None when the filing carries no non-derivative table.
    """

    id: str
    issuer: Issuer
    reporter_name: str | None
    transactions: Optional[Tuple[TransactionEntry, ...]]


@dataclass(frozen=True)
class ClassifiedTrade:
    id: str
    transaction_date: str | None
    code: str | None
    type_label: str
    polarity: Polarity
    shares: float
    price_per_share: float
    issuer_symbol: str | None = None
    reporter_name: str | None = None


@dataclass(frozen=True)
class SuggestionItem:
    symbol: str
    description: str


@dataclass(frozen=True)
class QuoteSnapshot:
    current_price: float = 0.0
    change: float | None = None
    change_percent: float = 0.0
    day_high: float = 0.0
    day_low: float = 0.0
    error: str | None = None


@dataclass(frozen=True)
class QueryParams:
    """The submitted search configuration (not the live text box)."""

    ticker: str
    period: LookbackPeriod = LookbackPeriod.M12
    filter: FilterMode = FilterMode.PS_ONLY


@dataclass(frozen=True)
class TradeLookup:
    documents: Tuple[DisclosureDocument, ...] = field(default_factory=tuple)
    quote: QuoteSnapshot | None = None


# -----------------------------
# JSON -> model boundary
# -----------------------------


def parse_amount(value: Any) -> float:
    """Validate a numeric amount read from JSON.

    Missing, null, non-numeric, non-finite and negative values all become 0.0.
    Numeric strings ("1,200.50") are accepted.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        out = float(value)
    else:
        t = str(value).strip().replace(",", "")
        if not t:
            return 0.0
        try:
            out = float(t)
        except ValueError:
            _debug(f"Non-numeric amount {value!r}; using 0")
            return 0.0
    if out != out or out in (float("inf"), float("-inf")):
        return 0.0
    if out < 0:
        _debug(f"Negative amount {value!r}; using 0")
        return 0.0
    return out


def _parse_optional_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    if out != out:
        return None
    return out


def _text(value: Any) -> str | None:
    if value is None:
        return None
    t = str(value).strip()
    return t if t else None


def _obj(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_transaction(raw: Any) -> TransactionEntry:
    tx = _obj(raw)
    amounts = _obj(tx.get("amounts"))
    return TransactionEntry(
        transaction_date=_text(tx.get("transactionDate")),
        code=_text(_obj(tx.get("coding")).get("code")),
        shares=parse_amount(amounts.get("shares")),
        price_per_share=parse_amount(amounts.get("pricePerShare")),
    )


def parse_document(raw: Any) -> DisclosureDocument:
    doc = _obj(raw)
    issuer = _obj(doc.get("issuer"))
    owner = doc.get("reportingOwner")
    # Some payloads carry a list of owners; the first one is the filer.
    if isinstance(owner, list):
        owner = owner[0] if owner else None

    transactions: Optional[Tuple[TransactionEntry, ...]] = None
    table = doc.get("nonDerivativeTable")
    if isinstance(table, dict) and isinstance(table.get("transactions"), list):
        transactions = tuple(parse_transaction(t) for t in table["transactions"])

    return DisclosureDocument(
        id=str(doc.get("id") or doc.get("accessionNo") or ""),
        issuer=Issuer(symbol=_text(issuer.get("tradingSymbol")), name=_text(issuer.get("name"))),
        reporter_name=_text(_obj(owner).get("name")),
        transactions=transactions,
    )


def parse_documents(raw: Any) -> Tuple[DisclosureDocument, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(parse_document(d) for d in raw)


def parse_quote(raw: Any) -> QuoteSnapshot | None:
    """Finnhub /quote shape: c (current), d (change), dp (change %), h, l.

    Returns None when there is no quote at all, so the quote panel is not drawn.
    """
    if raw is None:
        return None
    q = _obj(raw)
    if q.get("error"):
        return QuoteSnapshot(error=str(q["error"]))
    return QuoteSnapshot(
        current_price=parse_amount(q.get("c")),
        change=_parse_optional_number(q.get("d")),
        change_percent=_parse_optional_number(q.get("dp")) or 0.0,
        day_high=parse_amount(q.get("h")),
        day_low=parse_amount(q.get("l")),
    )


def parse_suggestions(raw: Any) -> List[SuggestionItem]:
    """Search payload -> suggestion list. A payload without `result` is empty."""
    items = _obj(raw).get("result")
    if not isinstance(items, list):
        return []
    out: List[SuggestionItem] = []
    for it in items:
        if not isinstance(it, dict):
            continue
        symbol = _text(it.get("symbol"))
        if not symbol:
            continue
        out.append(SuggestionItem(symbol=symbol, description=_text(it.get("description")) or ""))
    return out
