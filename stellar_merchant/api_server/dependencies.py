"""
FastAPI dependencies: settings and per-request upstream clients.

Clients are opened per request and closed after the response; tests replace
get_horizon_client / get_signing_client through app.dependency_overrides.
"""

from __future__ import annotations

from typing import Iterator

from fastapi import Depends

from stellar_merchant.config import Settings, get_settings
from stellar_merchant.horizon.client import HorizonClient
from stellar_merchant.signing.client import SigningServiceClient


def get_app_settings() -> Settings:
    return get_settings()


def get_horizon_client(settings: Settings = Depends(get_app_settings)) -> Iterator[HorizonClient]:
    """Dependency: Horizon client for the configured network."""
    client = HorizonClient(settings.horizon_url, timeout_sec=settings.request_timeout_sec)
    try:
        yield client
    finally:
        client.close()


def get_signing_client(settings: Settings = Depends(get_app_settings)) -> Iterator[SigningServiceClient]:
    """Dependency: signing service client (unconfigured clients answer 503 on use)."""
    client = SigningServiceClient(settings.signing_service_url, timeout_sec=settings.request_timeout_sec)
    try:
        yield client
    finally:
        client.close()
