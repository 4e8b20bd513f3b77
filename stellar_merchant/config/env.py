"""
Environment variable loading and network resolution.

- STELLAR_NETWORK: public | testnet (default: public)
- HORIZON_URL: Horizon endpoint (overrides the network default)
- SIGNING_SERVICE_URL: base URL of the signing microservice
  (falls back to NEXT_PUBLIC_API_URL, the name the web frontend uses)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is stellar_merchant/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

PUBLIC_HORIZON_URL = "https://horizon.stellar.org"
TESTNET_HORIZON_URL = "https://horizon-testnet.stellar.org"

NETWORK_PUBLIC = "public"
NETWORK_TESTNET = "testnet"


def load_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env vars."""
    if _ENV_PATH.is_file():
        load_dotenv(_ENV_PATH, override=False)


def get_stellar_network() -> str:
    """
    Return STELLAR_NETWORK from env: public | testnet.
    Default: public (the merchant tool runs against mainnet).
    """
    load_env()
    raw = (os.getenv("STELLAR_NETWORK") or NETWORK_PUBLIC).strip().lower()
    if raw in ("testnet", "test"):
        return NETWORK_TESTNET
    return NETWORK_PUBLIC


def get_horizon_url() -> str:
    """
    Resolve Horizon URL.
    Order: HORIZON_URL > network default.
    """
    load_env()
    url = (os.getenv("HORIZON_URL") or "").strip()
    if url:
        return url.rstrip("/")
    if get_stellar_network() == NETWORK_TESTNET:
        return TESTNET_HORIZON_URL
    return PUBLIC_HORIZON_URL


def get_signing_service_url() -> str:
    """Return the signing service base URL, or "" when none is configured."""
    load_env()
    url = (os.getenv("SIGNING_SERVICE_URL") or os.getenv("NEXT_PUBLIC_API_URL") or "").strip()
    return url.rstrip("/")
