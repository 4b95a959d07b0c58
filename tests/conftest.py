"""Shared fixtures: a manual clock scheduler and Form 4 JSON builders."""

from typing import Any, Callable, Dict, List, Optional

import pytest


class FakeTimer:
    def __init__(self, when: float, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """call_later on a clock that only moves when the test says so."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> FakeTimer:
        t = FakeTimer(self.now + delay, callback, args)
        self.timers.append(t)
        return t

    @property
    def pending(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance_to(self, when: float) -> None:
        while True:
            due = [t for t in self.pending if t.when <= when]
            if not due:
                break
            t = min(due, key=lambda x: x.when)
            self.timers.remove(t)
            self.now = t.when
            t.callback(*t.args)
        self.now = when

    def advance(self, seconds: float) -> None:
        self.advance_to(self.now + seconds)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


def tx_json(
    code: str,
    date: str = "2024-05-01",
    shares: Optional[float] = None,
    price: Optional[float] = None,
    with_amounts: bool = True,
) -> Dict[str, Any]:
    tx: Dict[str, Any] = {"transactionDate": date, "coding": {"code": code}}
    if with_amounts:
        amounts: Dict[str, Any] = {}
        if shares is not None:
            amounts["shares"] = shares
        if price is not None:
            amounts["pricePerShare"] = price
        tx["amounts"] = amounts
    return tx


def doc_json(
    doc_id: str,
    transactions: Optional[List[Dict[str, Any]]],
    symbol: str = "AAPL",
    owner: str = "Cook Timothy D",
) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "id": doc_id,
        "issuer": {"tradingSymbol": symbol, "name": f"{symbol} Inc."},
        "reportingOwner": {"name": owner},
    }
    if transactions is not None:
        d["nonDerivativeTable"] = {"transactions": transactions}
    return d
