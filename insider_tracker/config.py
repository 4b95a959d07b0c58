import os
from dataclasses import dataclass

# Optional: load a local .env file if present.
try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    # If python-dotenv isn't installed or .env isn't present, that's fine.
    pass


def _env_float(name: str, default: float) -> float:
    """Parse a float environment variable, falling back to default when unset or invalid."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Config:
    """Backend runtime configuration.

    IMPORTANT: Provide API keys via environment variables or a .env file.
    Do not hardcode secrets in source code.
    """

    # -----------------
    # sec-api.io (Form 4 full-text query API)
    # -----------------
    SEC_API_KEY: str | None = os.environ.get("SEC_API_KEY")
    SEC_API_BASE_URL: str = os.environ.get("SEC_API_BASE_URL", "https://api.sec-api.io")

    # Size of one query page; the client shows a single page, newest filings first.
    SEC_API_PAGE_SIZE: int = int(os.environ.get("SEC_API_PAGE_SIZE", "50"))

    # -----------------
    # Finnhub (quote + symbol search)
    # -----------------
    FINNHUB_API_KEY: str | None = os.environ.get("FINNHUB_API_KEY")
    FINNHUB_BASE_URL: str = os.environ.get("FINNHUB_BASE_URL", "https://finnhub.io/api/v1")

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = _env_float("HTTP_TIMEOUT_SECONDS", 60.0)

    # -----------------
    # CORS
    # -----------------
    # Comma-separated list. The hosted frontend and a local dev server by default.
    CORS_ALLOW_ORIGINS: str = os.environ.get(
        "CORS_ALLOW_ORIGINS",
        "https://insider-trading-tracker.vercel.app,http://localhost:3000",
    )


def load_config() -> Config:
    return Config()


@dataclass(frozen=True)
class ClientSettings:
    """Client-side settings.

    Plain values only: the client keeps all of its state in memory and reads
    nothing from the environment.
    """

    api_base_url: str = "https://insider-trading-tracker.onrender.com"

    # Quiet period after the last keystroke before a suggestion request fires.
    # Earlier builds used 0.5s.
    debounce_seconds: float = 0.3

    request_timeout_seconds: float = 30.0

    # When True, SessionCoordinator.start() refreshes the feed once.
    # Default is manual refresh only.
    feed_autoload: bool = False

    # Initial text of the ticker box.
    initial_ticker: str = "AAPL"

    def api_url(self, path: str) -> str:
        return f"{self.api_base_url.rstrip('/')}/api/v1/{path.lstrip('/')}"
