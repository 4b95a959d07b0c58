from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from insider_tracker.models import Polarity


@dataclass(frozen=True)
class Classification:
    label: str
    polarity: Polarity


# Form 4 transaction codes the UI names explicitly.
_CODES: Dict[str, Tuple[str, Polarity]] = {
    "P": ("Buy", Polarity.POSITIVE),
    "S": ("Sell", Polarity.NEGATIVE),
    "M": ("Option exercise", Polarity.NEUTRAL),
    "G": ("Gift", Polarity.NEUTRAL),
    "F": ("Tax payment", Polarity.NEUTRAL),
}

OPEN_MARKET_CODES = frozenset({"P", "S"})


def classify(code: str | None) -> Classification:
    """Map a transaction code to its label and polarity.

    Unknown codes are passed through as their own label, neutral.
    """
    hit = _CODES.get(code or "")
    if hit is None:
        return Classification(label=code or "", polarity=Polarity.NEUTRAL)
    label, polarity = hit
    return Classification(label=label, polarity=polarity)


def is_open_market(code: str | None) -> bool:
    return code in OPEN_MARKET_CODES


def change_polarity(change: float | None) -> Polarity:
    """Polarity of a day-change value for quote colouring.

    Strictly positive is POSITIVE; zero and below are NEGATIVE. No value at all
    gets no colour.
    """
    if change is None:
        return Polarity.NEUTRAL
    return Polarity.POSITIVE if change > 0 else Polarity.NEGATIVE
