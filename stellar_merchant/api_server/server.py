"""
FastAPI server: JSON API behind the merchant dashboard.

Every route is a single fetch-and-reshape against Horizon or a pass-through to
the signing service. Errors use one envelope: {"success": false, "error": msg}.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stellar_merchant import __version__
from stellar_merchant.api_server.accounts import router as accounts_router
from stellar_merchant.api_server.analytics import router as analytics_router
from stellar_merchant.api_server.middleware import request_logging_middleware
from stellar_merchant.api_server.payments import router as payments_router
from stellar_merchant.api_server.trustlines import router as trustlines_router
from stellar_merchant.core.exceptions import AccountNotFoundError, MerchantError
from stellar_merchant.logging import get_logger

logger = get_logger(__name__)


app = FastAPI(
    title="Stellar Merchant Tool API",
    description="Account balances, payment history, analytics, payment requests and trustlines over Horizon.",
    version=__version__,
)

# The dashboard is served from another origin during development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.middleware("http")(request_logging_middleware)

app.include_router(accounts_router, prefix="/api")
app.include_router(payments_router, prefix="/api")
app.include_router(trustlines_router, prefix="/api")
app.include_router(analytics_router, prefix="/api")


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness check: API is up."""
    return {"status": "ok"}


# -----------------------------------------------------------------------------
# Error envelope
# -----------------------------------------------------------------------------


@app.exception_handler(AccountNotFoundError)
def account_not_found_handler(request: Request, exc: AccountNotFoundError) -> JSONResponse:
    """Unfunded accounts are a normal state for the UI: 200 with exists=false."""
    return JSONResponse(
        status_code=200,
        content={"success": False, "exists": False, "error": exc.message},
    )


@app.exception_handler(MerchantError)
def merchant_error_handler(request: Request, exc: MerchantError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("api_error", path=request.url.path, status=exc.status_code, error=exc.message)
    else:
        logger.info("api_client_error", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: list[Any] = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"Invalid request: {location} {first.get('msg', '')}".strip() if location else "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "error": message})


@app.exception_handler(Exception)
def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("api_unhandled_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": str(exc) or "Internal server error"},
    )
