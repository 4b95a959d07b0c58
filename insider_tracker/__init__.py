"""Insider Trade Tracker (SEC Form 4) - client core + proxy backend.

Two halves:
- Client: ticker autocomplete, trade lookup and a P/S feed, driven by a
  single-threaded session that talks to the backend over HTTP.
- Backend: a thin FastAPI proxy in front of sec-api.io (Form 4 search) and
  Finnhub (quote, symbol search).

Core concepts:
- A disclosure document is one Form 4 filing; its non-derivative table holds
  the transaction entries.
- Open-market P/S trades are the "real" signals; M/G/F are shown only on
  request.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
