"""
FastAPI router: account lookups, balances and keypair creation.

GET /account, GET /account/check, GET /balance, GET /keypair (mounted under /api).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from stellar_merchant.api_server.dependencies import get_horizon_client, get_signing_client
from stellar_merchant.horizon.client import HorizonClient
from stellar_merchant.logging import get_logger
from stellar_merchant.signing.client import SigningServiceClient

logger = get_logger(__name__)

router = APIRouter(tags=["accounts"])


@router.get("/account")
def get_account(
    public_key: str | None = Query(None, alias="publicKey"),
    horizon: HorizonClient = Depends(get_horizon_client),
) -> dict[str, Any]:
    """
    Account document from Horizon.

    An unfunded account answers 200 with success=false, exists=false so the
    page can show "not activated" instead of a failure toast.
    """
    return horizon.get_account(public_key or "")


@router.get("/account/check")
def check_account(
    public_key: str | None = Query(None, alias="publicKey"),
    horizon: HorizonClient = Depends(get_horizon_client),
) -> dict[str, Any]:
    return horizon.check_account_exists(public_key or "")


@router.get("/balance")
def get_asset_balance(
    public_key: str | None = Query(None, alias="publicKey"),
    asset_code: str = Query("XLM", alias="assetCode"),
    asset_issuer: str | None = Query(None, alias="assetIssuer"),
    horizon: HorizonClient = Depends(get_horizon_client),
) -> dict[str, Any]:
    """Balance of one asset; with no issuer every trustline with that code is returned."""
    return horizon.get_asset_balance(public_key or "", asset_code, asset_issuer or None)


@router.get("/keypair")
def create_keypair(signing: SigningServiceClient = Depends(get_signing_client)) -> dict[str, Any]:
    """Fresh keypair from the signing service, returned verbatim to the create-account page."""
    logger.info("keypair_requested")
    return signing.create_keypair()
