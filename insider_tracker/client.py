from __future__ import annotations

from typing import Any, Dict, List, Tuple

import requests

from insider_tracker.config import ClientSettings
from insider_tracker.models import (
    DisclosureDocument,
    FilterMode,
    LookbackPeriod,
    QueryParams,
    SuggestionItem,
    TradeLookup,
    parse_documents,
    parse_quote,
    parse_suggestions,
)


class ApiError(RuntimeError):
    """A backend call failed: transport, undecodable body or an `error` payload.

    str(exc) is the message shown to the user.
    """


def _debug(msg: str) -> None:
    print(f"[client] {msg}")


def _get_json(url: str, params: Dict[str, Any], timeout: float) -> Dict[str, Any]:
    """GET a backend endpoint and return its JSON object.

    The backend reports failures as {"error": "..."} (usually with HTTP 500);
    that message is raised verbatim.
    """
    _debug(f"GET {url} params={params}")
    try:
        r = requests.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise ApiError(f"Request to {url} failed: {e}") from e

    try:
        data = r.json() if r.text else {}
    except ValueError as e:
        raise ApiError(f"Backend returned non-JSON response ({r.status_code}): {r.text[:200]}") from e

    if isinstance(data, dict) and data.get("error"):
        raise ApiError(str(data["error"]))
    if r.status_code != 200:
        raise ApiError(f"Backend error {r.status_code}: {r.text[:200]}")
    if not isinstance(data, dict):
        raise ApiError(f"Backend returned unexpected payload: {str(data)[:200]}")
    return data


class BackendClient:
    """Blocking client for the tracker backend (/api/v1)."""

    def __init__(self, settings: ClientSettings | None = None) -> None:
        self.settings = settings or ClientSettings()

    def _get(self, path: str, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        return _get_json(
            self.settings.api_url(path),
            params or {},
            self.settings.request_timeout_seconds,
        )

    def search_symbols(self, text: str) -> List[SuggestionItem]:
        """Ticker autocomplete. A payload without `result` yields []."""
        data = self._get("search", {"q": text})
        return parse_suggestions(data)

    def fetch_insider_trades(self, query: QueryParams) -> TradeLookup:
        params = {
            "ticker": query.ticker,
            "period": LookbackPeriod(query.period).value,
            "filter": FilterMode(query.filter).value,
        }
        data = self._get("insider-trades", params)
        tx_resp = data.get("transactionsResponse") or {}
        documents = parse_documents(tx_resp.get("transactions") if isinstance(tx_resp, dict) else None)
        quote = parse_quote(data.get("quote"))
        _debug(f"insider-trades ticker={query.ticker} documents={len(documents)} quote={'yes' if quote else 'no'}")
        return TradeLookup(documents=documents, quote=quote)

    def fetch_daily_feed(self) -> Tuple[DisclosureDocument, ...]:
        data = self._get("daily-feed")
        documents = parse_documents(data.get("transactions"))
        _debug(f"daily-feed documents={len(documents)}")
        return documents
