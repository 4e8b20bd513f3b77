"""
FastAPI router: payment history, sending payments, payment requests, asset catalogue.

Mounted under /api.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from stellar_merchant.analytics import search_payments
from stellar_merchant.api_server.dependencies import (
    get_app_settings,
    get_horizon_client,
    get_signing_client,
)
from stellar_merchant.api_server.schemas import PaymentRequestBody, SendPaymentBody
from stellar_merchant.config import Settings
from stellar_merchant.core.exceptions import AccountNotFoundError, InvalidRequestError
from stellar_merchant.horizon.client import HorizonClient
from stellar_merchant.logging import get_logger
from stellar_merchant.logging.logger import short_account
from stellar_merchant.payments import create_payment_request, get_common_assets
from stellar_merchant.signing.client import SigningServiceClient

logger = get_logger(__name__)

router = APIRouter(tags=["payments"])


def _account_param(public_key: str | None, account_id: str | None) -> str:
    """publicKey wins; accountId is accepted because older dashboard pages send it."""
    return (public_key or account_id or "").strip()


def _not_found_payments(exc: AccountNotFoundError) -> dict[str, Any]:
    return {"success": False, "exists": False, "error": exc.message, "payments": []}


@router.get("/payments")
def get_payments(
    public_key: str | None = Query(None, alias="publicKey"),
    account_id: str | None = Query(None, alias="accountId"),
    limit: int | None = Query(None, description="Page size (1-200)"),
    horizon: HorizonClient = Depends(get_horizon_client),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
    """Newest-first payment records for an account, as Horizon returns them."""
    key = _account_param(public_key, account_id)
    try:
        return horizon.get_payment_history(key, settings.page_size(limit))
    except AccountNotFoundError as e:
        return _not_found_payments(e)


@router.post("/payments")
def payments_endpoint_status() -> dict[str, Any]:
    return {"success": True, "message": "Payment endpoint is working"}


@router.get("/payments/search")
def search_payment_history(
    public_key: str | None = Query(None, alias="publicKey"),
    search: str = Query(""),
    status: str = Query("all", description="all | success | failed"),
    limit: int | None = Query(None),
    horizon: HorizonClient = Depends(get_horizon_client),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
    """Formatted payment feed filtered by free text and status."""
    try:
        return search_payments(
            horizon,
            public_key or "",
            search=search,
            status=status,
            limit=settings.page_size(limit),
        )
    except AccountNotFoundError as e:
        return _not_found_payments(e)


@router.post("/payment")
def send_payment(
    body: SendPaymentBody,
    signing: SigningServiceClient = Depends(get_signing_client),
) -> Any:
    """
    Send a payment through the signing service: create-payment, then submit-transaction.

    A create-payment result with success=false is passed back with status 500;
    the submit-transaction result is returned as-is.
    """
    if not body.source_secret or not body.destination_address or body.amount in (None, ""):
        raise InvalidRequestError("Missing required parameters")
    logger.info(
        "payment_send_requested",
        account_id=short_account(body.destination_address),
        asset_code=body.asset_code,
    )
    created = signing.create_payment(
        body.source_secret,
        body.destination_address,
        str(body.amount),
        asset_code=body.asset_code or "XLM",
        asset_issuer=body.asset_issuer,
    )
    if not created.get("success"):
        logger.warning("payment_create_rejected", error=created.get("error"))
        return JSONResponse(status_code=500, content=created)
    return signing.submit_created_payment(created)


@router.post("/payment-request")
def payment_request(body: PaymentRequestBody) -> dict[str, Any]:
    """web+stellar:pay URI (plus request metadata) for the QR generator."""
    return create_payment_request(
        body.destination_address,
        body.amount,
        asset_code=body.asset_code,
        asset_issuer=body.asset_issuer,
        memo=body.memo,
        memo_type=body.memo_type,
    )


@router.get("/assets")
def list_assets() -> dict[str, Any]:
    return {"success": True, "assets": get_common_assets()}
