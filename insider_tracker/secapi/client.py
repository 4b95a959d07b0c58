from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

import requests

from insider_tracker.models import FilterMode, LookbackPeriod
from insider_tracker.util.time import iso_date, months_before, utc_today

# Lucene-style clause matching filings with at least one open-market P/S entry.
OPEN_MARKET_CLAUSE = (
    '(nonDerivativeTable.transactions.coding.code:"P"'
    ' OR nonDerivativeTable.transactions.coding.code:"S")'
)


def _debug(msg: str) -> None:
    print(f"[sec-api] {msg}")


def build_insider_query(
    ticker: str,
    period: LookbackPeriod | str,
    filter_mode: FilterMode | str,
    *,
    today: Optional[date] = None,
) -> str:
    """Query string for one issuer's Form 4 filings over the lookback period.

    periodOfReport runs from `today - period` to `today`. PS_ONLY additionally
    requires a P or S entry in the non-derivative table.
    """
    t = (ticker or "").strip().upper()
    if not t:
        raise RuntimeError("Ticker is blank; cannot build sec-api query")

    end = today or utc_today()
    start = months_before(end, LookbackPeriod(period).months)

    q = f'issuer.tradingSymbol:"{t}" AND periodOfReport:[{iso_date(start)} TO {iso_date(end)}]'
    if FilterMode(filter_mode) is FilterMode.PS_ONLY:
        q += f" AND {OPEN_MARKET_CLAUSE}"
    return q


def build_feed_query() -> str:
    """Latest open-market trades across all issuers."""
    return OPEN_MARKET_CLAUSE


def build_payload(query: str, size: int) -> Dict[str, Any]:
    return {
        "query": query,
        "from": "0",
        "size": str(int(size)),
        "sort": [{"filedAt": {"order": "desc"}}],
    }


def search_insider_trading(
    base_url: str,
    api_key: str,
    query: str,
    *,
    size: int = 50,
    timeout: float = 60.0,
) -> Dict[str, Any]:
    """POST a query to the insider-trading endpoint; newest filings first.

    Returns the decoded payload ({"total": ..., "transactions": [...]}).
    """
    url = f"{base_url.rstrip('/')}/insider-trading"
    _debug(f"Query: {query}")
    r = requests.post(
        url,
        params={"token": api_key},
        json=build_payload(query, size),
        timeout=timeout,
    )
    if r.status_code != 200:
        raise RuntimeError(f"sec-api.io error {r.status_code}: {r.text[:500]}")

    data = r.json() if r.text else {}
    if not isinstance(data, dict):
        raise RuntimeError(f"sec-api.io returned unexpected payload: {str(data)[:500]}")
    if data.get("error"):
        raise RuntimeError(f"sec-api.io response error: {data['error']}")

    _debug(f"Parsed response: transactions={len(data.get('transactions') or [])}")
    return data
