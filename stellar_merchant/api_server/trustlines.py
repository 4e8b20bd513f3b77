"""
FastAPI router: list and add trustlines.

GET /trustlines reads Horizon; POST /trustlines and POST /trustline hand the
change-trust operation to the signing service (the latter forwards a limit).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from stellar_merchant.api_server.dependencies import get_horizon_client, get_signing_client
from stellar_merchant.api_server.schemas import TrustlineBody
from stellar_merchant.core.exceptions import AccountNotFoundError, InvalidRequestError
from stellar_merchant.horizon.client import HorizonClient
from stellar_merchant.logging import get_logger
from stellar_merchant.signing.client import SigningServiceClient

logger = get_logger(__name__)

router = APIRouter(tags=["trustlines"])


@router.get("/trustlines")
def list_trustlines(
    public_key: str | None = Query(None, alias="publicKey"),
    horizon: HorizonClient = Depends(get_horizon_client),
) -> dict[str, Any]:
    try:
        return horizon.get_trustlines(public_key or "")
    except AccountNotFoundError as e:
        return {"success": False, "exists": False, "error": e.message, "trustlines": []}


def _add_trustline(signing: SigningServiceClient, body: TrustlineBody, *, with_limit: bool) -> dict[str, Any]:
    limit = str(body.limit) if with_limit and body.limit not in (None, "") else None
    logger.info(
        "trustline_requested",
        asset_code=body.asset_code,
        asset_issuer=body.asset_issuer,
        limit=limit,
    )
    return signing.create_trustline(body.secret_key, body.asset_code, body.asset_issuer, limit=limit)


@router.post("/trustlines")
def add_trustline(
    body: TrustlineBody,
    signing: SigningServiceClient = Depends(get_signing_client),
) -> dict[str, Any]:
    if body.missing_required():
        raise InvalidRequestError("Missing required parameters")
    return _add_trustline(signing, body, with_limit=False)


@router.post("/trustline")
def add_trustline_with_limit(
    body: TrustlineBody,
    signing: SigningServiceClient = Depends(get_signing_client),
) -> dict[str, Any]:
    """Same as POST /trustlines, but forwards the optional trust limit."""
    if body.missing_required():
        raise InvalidRequestError("Missing required parameters: secretKey, assetCode, or assetIssuer")
    return _add_trustline(signing, body, with_limit=True)
