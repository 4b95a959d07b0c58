from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from insider_tracker.config import Config, load_config
from insider_tracker.finnhub.client import fetch_quote, search_symbols
from insider_tracker.models import FilterMode, LookbackPeriod
from insider_tracker.secapi.client import build_feed_query, build_insider_query, search_insider_trading


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


app = FastAPI(title="Insider Trade Tracker", version="0.1.0")
cfg: Config = load_config()

_cors_origins = [o.strip() for o in (cfg.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]
if _cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )


def _error_response(e: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(e)})


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bad or missing query parameters get the same {"error": ...} shape as upstream failures."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "query")
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}" if loc else str(err.get("msg", "invalid value")))
    message = "Invalid request: " + ("; ".join(parts) or "bad parameters")
    _debug(f"{request.url.path} {message}")
    return _error_response(RuntimeError(message))


def _require_sec_api_key() -> str:
    if not cfg.SEC_API_KEY:
        raise RuntimeError("SEC_API_KEY is not set")
    return cfg.SEC_API_KEY


def _require_finnhub_key() -> str:
    if not cfg.FINNHUB_API_KEY:
        raise RuntimeError("FINNHUB_API_KEY is not set")
    return cfg.FINNHUB_API_KEY


# -----------------------------
# Health
# -----------------------------


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "ok"}


# -----------------------------
# Insider trades (+ quote)
# -----------------------------


@app.get("/api/v1/insider-trades")
def insider_trades(
    ticker: str,
    period: LookbackPeriod = Query(LookbackPeriod.M12),
    filter: FilterMode = Query(FilterMode.PS_ONLY),
) -> Any:
    """Form 4 filings for one ticker plus its current quote.

    A quote failure does not fail the request: it is returned as {"error": ...}
    inside `quote` so the transactions still show.
    """
    _debug(f"insider-trades ticker={ticker} period={period.value} filter={filter.value}")
    try:
        query = build_insider_query(ticker, period, filter)
        sec_data = search_insider_trading(
            cfg.SEC_API_BASE_URL,
            _require_sec_api_key(),
            query,
            size=cfg.SEC_API_PAGE_SIZE,
            timeout=cfg.HTTP_TIMEOUT_SECONDS,
        )
    except Exception as e:
        _debug(f"insider-trades error ticker={ticker}: {e}")
        return _error_response(e)

    try:
        quote: Dict[str, Any] = fetch_quote(
            cfg.FINNHUB_BASE_URL,
            _require_finnhub_key(),
            ticker,
            timeout=cfg.HTTP_TIMEOUT_SECONDS,
        )
    except Exception as e:
        _debug(f"quote error ticker={ticker}: {e}")
        quote = {"error": f"Finnhub /quote call failed: {e}"}

    return {"transactionsResponse": sec_data, "quote": quote}


# -----------------------------
# Daily feed
# -----------------------------


@app.get("/api/v1/daily-feed")
def daily_feed() -> Any:
    """Newest open-market P/S filings across all issuers."""
    try:
        return search_insider_trading(
            cfg.SEC_API_BASE_URL,
            _require_sec_api_key(),
            build_feed_query(),
            size=cfg.SEC_API_PAGE_SIZE,
            timeout=cfg.HTTP_TIMEOUT_SECONDS,
        )
    except Exception as e:
        _debug(f"daily-feed error: {e}")
        return _error_response(e)


# -----------------------------
# Ticker search (autocomplete)
# -----------------------------


@app.get("/api/v1/search")
def ticker_search(q: str) -> Any:
    try:
        return search_symbols(
            cfg.FINNHUB_BASE_URL,
            _require_finnhub_key(),
            q,
            timeout=cfg.HTTP_TIMEOUT_SECONDS,
        )
    except Exception as e:
        _debug(f"search error q={q!r}: {e}")
        return _error_response(e)
