from __future__ import annotations

from typing import Any, Dict

import requests


def _debug(msg: str) -> None:
    print(f"[finnhub] {msg}")


def _get(base_url: str, path: str, params: Dict[str, Any], timeout: float) -> Dict[str, Any]:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = requests.get(url, params=params, timeout=timeout)
    if r.status_code != 200:
        raise RuntimeError(f"Finnhub /{path.lstrip('/')} error {r.status_code}: {r.text[:500]}")
    data = r.json() if r.text else {}
    if not isinstance(data, dict):
        raise RuntimeError(f"Finnhub /{path.lstrip('/')} returned unexpected payload: {str(data)[:500]}")
    return data


def fetch_quote(base_url: str, api_key: str, symbol: str, *, timeout: float = 60.0) -> Dict[str, Any]:
    """Real-time quote: c (current), d (change), dp (change %), h, l, o, pc."""
    s = (symbol or "").strip().upper()
    if not s:
        raise RuntimeError("Symbol is blank; cannot fetch quote")
    _debug(f"Fetching quote symbol={s}")
    return _get(base_url, "quote", {"symbol": s, "token": api_key}, timeout)


def search_symbols(base_url: str, api_key: str, query: str, *, timeout: float = 60.0) -> Dict[str, Any]:
    """Symbol lookup: {"count": n, "result": [{"symbol", "description", ...}]}."""
    _debug(f"Searching symbols q={query!r}")
    return _get(base_url, "search", {"q": query, "token": api_key}, timeout)
