"""
FastAPI router: dashboard and analytics views (GET /dashboard, GET /analytics under /api).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from stellar_merchant.analytics import run_account_analytics, run_dashboard
from stellar_merchant.api_server.dependencies import get_app_settings, get_horizon_client
from stellar_merchant.config import Settings
from stellar_merchant.core.exceptions import AccountNotFoundError
from stellar_merchant.horizon.client import HorizonClient

router = APIRouter(tags=["analytics"])


@router.get("/dashboard")
def dashboard(
    public_key: str | None = Query(None, alias="publicKey"),
    limit: int | None = Query(None),
    horizon: HorizonClient = Depends(get_horizon_client),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
    try:
        return run_dashboard(horizon, public_key or "", settings.page_size(limit))
    except AccountNotFoundError as e:
        return {"success": False, "exists": False, "error": e.message, "balances": [], "transactions": []}


@router.get("/analytics")
def analytics(
    public_key: str | None = Query(None, alias="publicKey"),
    limit: int | None = Query(None),
    horizon: HorizonClient = Depends(get_horizon_client),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
    """Asset allocation, per-day volume and per-asset counts over the latest payments."""
    try:
        return run_account_analytics(horizon, public_key or "", settings.page_size(limit))
    except AccountNotFoundError as e:
        return {
            "success": False,
            "exists": False,
            "error": e.message,
            "assets": [],
            "transactions": [],
            "dailyVolume": [],
            "assetCounts": [],
        }
