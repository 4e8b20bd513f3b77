"""
Application settings.

Responsibilities:
- Read configuration from environment variables (and .env via config.env).
- Provide defaults for optional values.
- Expose typed settings (Horizon URL, signing service URL, API port, etc.)
  for use across the API server, clients and entrypoint.
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass

from stellar_merchant.config.env import (
    get_horizon_url,
    get_signing_service_url,
    get_stellar_network,
    load_env,
)

# Horizon caps a single page of records at 200
MAX_PAYMENT_LIMIT = 200


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Resolved service configuration."""

    stellar_network: str
    horizon_url: str
    signing_service_url: str
    request_timeout_sec: float = 15.0
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"
    default_payment_limit: int = 10

    @property
    def signing_enabled(self) -> bool:
        return bool(self.signing_service_url)

    def page_size(self, limit: int | None) -> int:
        """Requested payments page size, or the configured default when none was given."""
        return self.default_payment_limit if limit is None else limit


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the current application settings (cached for the process).

    Raises:
        ValueError: a numeric env var cannot be parsed, or the default
            payment limit falls outside 1..200.
    """
    load_env()
    limit = _env_int("PAYMENT_HISTORY_LIMIT", 10)
    if not 1 <= limit <= MAX_PAYMENT_LIMIT:
        raise ValueError(f"PAYMENT_HISTORY_LIMIT must be between 1 and {MAX_PAYMENT_LIMIT}")
    return Settings(
        stellar_network=get_stellar_network(),
        horizon_url=get_horizon_url(),
        signing_service_url=get_signing_service_url(),
        request_timeout_sec=_env_float("REQUEST_TIMEOUT_SEC", 15.0),
        api_host=(os.getenv("API_HOST") or "0.0.0.0").strip(),
        api_port=_env_int("API_PORT", 8000),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        default_payment_limit=limit,
    )


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
