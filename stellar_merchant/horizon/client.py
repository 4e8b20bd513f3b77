"""
Horizon REST client: account, balance, trustline and payment lookups.

Responsibilities:
- Fetch account documents and payment pages from Horizon over HTTP.
- Reshape them into the small dicts the dashboard consumes.
- Translate upstream failures into MerchantError subclasses (404 becomes
  AccountNotFoundError, any other non-2xx becomes UpstreamError).

No retries: an upstream failure is reported to the caller as-is.
"""

from __future__ import annotations

from typing import Any

import httpx

from stellar_merchant.config.env import PUBLIC_HORIZON_URL
from stellar_merchant.config.settings import MAX_PAYMENT_LIMIT
from stellar_merchant.core.account_utils import require_public_key
from stellar_merchant.core.exceptions import (
    AccountNotFoundError,
    InvalidRequestError,
    UpstreamError,
)
from stellar_merchant.horizon.models import NATIVE_ASSET_CODE
from stellar_merchant.logging import get_logger
from stellar_merchant.logging.logger import short_account

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SEC = 15.0
DEFAULT_PAYMENT_LIMIT = 10

ACCOUNT_EXISTS_MESSAGE = "Account exists on the network"


def clamp_limit(limit: int | None, default: int = DEFAULT_PAYMENT_LIMIT) -> int:
    """Clamp a requested page size into Horizon's 1..200 window."""
    if limit is None:
        return default
    return max(1, min(int(limit), MAX_PAYMENT_LIMIT))


class HorizonClient:
    """
    Synchronous Horizon client.

    One instance wraps one httpx.Client; pass `client` to share a pool or to
    inject a mock transport in tests. Use as a context manager (or call
    close()) when the instance owns its client.
    """

    def __init__(
        self,
        base_url: str = PUBLIC_HORIZON_URL,
        *,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Args:
            base_url: Horizon root (e.g. https://horizon.stellar.org).
            timeout_sec: HTTP timeout per request.
            client: Optional preconfigured httpx.Client; not closed by close().
        """
        if not base_url.strip():
            raise ValueError("base_url must be non-empty")
        self._base_url = base_url.strip().rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout_sec))

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HorizonClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        url = f"{self._base_url}{path}"
        try:
            resp = self._client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("horizon_transport_error", path=path, error=str(e))
            raise UpstreamError(f"Horizon request failed: {e}") from e
        logger.debug("horizon_response", path=path, status=resp.status_code)
        return resp

    def _json(self, resp: httpx.Response) -> dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError("Horizon returned invalid JSON", upstream_status=resp.status_code) from e
        if not isinstance(data, dict):
            raise UpstreamError("Horizon returned an unexpected payload", upstream_status=resp.status_code)
        return data

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def load_account(self, public_key: str) -> dict[str, Any]:
        """
        Return the raw Horizon account document.

        Raises:
            InvalidRequestError: public_key missing or not a valid account id.
            AccountNotFoundError: Horizon answered 404.
            UpstreamError: any other non-2xx or transport failure.
        """
        key = require_public_key(public_key)
        resp = self._get(f"/accounts/{key}")
        if resp.status_code == 404:
            logger.info("horizon_account_not_found", account_id=short_account(key))
            raise AccountNotFoundError(key)
        if not resp.is_success:
            logger.warning("horizon_account_error", account_id=short_account(key), status=resp.status_code)
            raise UpstreamError.from_status(resp.status_code)
        return self._json(resp)

    def check_account_exists(self, public_key: str) -> dict[str, Any]:
        """{success, exists, message}; a missing account is not an error here."""
        try:
            self.load_account(public_key)
        except AccountNotFoundError as e:
            return {"success": True, "exists": False, "message": e.message}
        return {"success": True, "exists": True, "message": ACCOUNT_EXISTS_MESSAGE}

    def get_account(self, public_key: str) -> dict[str, Any]:
        """{success, exists, account} for an existing account; raises AccountNotFoundError otherwise."""
        account = self.load_account(public_key)
        return {"success": True, "exists": True, "account": account}

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    def fetch_payment_records(self, public_key: str, limit: int | None = DEFAULT_PAYMENT_LIMIT) -> list[dict[str, Any]]:
        """Newest-first payment operation records for an account (no existence check)."""
        key = require_public_key(public_key)
        page_size = clamp_limit(limit)
        resp = self._get(
            f"/accounts/{key}/payments",
            params={"limit": page_size, "order": "desc"},
        )
        if resp.status_code == 404:
            raise AccountNotFoundError(key)
        if not resp.is_success:
            logger.warning("horizon_payments_error", account_id=short_account(key), status=resp.status_code)
            raise UpstreamError.from_status(resp.status_code)
        data = self._json(resp)
        records = (data.get("_embedded") or {}).get("records") or []
        return [r for r in records if isinstance(r, dict)]

    def get_payment_history(self, public_key: str, limit: int | None = DEFAULT_PAYMENT_LIMIT) -> dict[str, Any]:
        """
        {success, exists, payments} for an account.

        Checks the account first so an unfunded address yields
        AccountNotFoundError rather than an empty page.
        """
        status = self.check_account_exists(public_key)
        if not status["exists"]:
            raise AccountNotFoundError(public_key.strip())
        payments = self.fetch_payment_records(public_key, limit)
        logger.info(
            "horizon_payment_history",
            account_id=short_account(public_key),
            record_count=len(payments),
        )
        return {"success": True, "exists": True, "payments": payments}

    # ------------------------------------------------------------------
    # Balances and trustlines
    # ------------------------------------------------------------------

    def get_asset_balance(
        self,
        public_key: str,
        asset_code: str = NATIVE_ASSET_CODE,
        asset_issuer: str | None = None,
    ) -> dict[str, Any]:
        """
        Balance of one asset held by an account.

        XLM returns the native balance; code+issuer an exact match; code alone
        returns every matching balance under `balances` (or balance "0" when
        none match).
        """
        code = (asset_code or NATIVE_ASSET_CODE).strip()
        if not code:
            raise InvalidRequestError("Asset code is required")
        account = self.load_account(public_key)
        raw_balances = account.get("balances") or []

        if code == NATIVE_ASSET_CODE:
            native = next((b for b in raw_balances if b.get("asset_type") == "native"), None)
            balance = native.get("balance", "0") if native else "0"
        elif asset_issuer:
            match = next(
                (
                    b
                    for b in raw_balances
                    if b.get("asset_code") == code and b.get("asset_issuer") == asset_issuer
                ),
                None,
            )
            balance = match.get("balance", "0") if match else "0"
        else:
            matches = [b for b in raw_balances if b.get("asset_code") == code]
            if matches:
                return {"success": True, "exists": True, "balances": matches}
            balance = "0"

        return {"success": True, "exists": True, "balance": balance}

    def get_trustlines(self, public_key: str) -> dict[str, Any]:
        """{success, exists, trustlines}: every non-native balance line of the account."""
        account = self.load_account(public_key)
        trustlines = [b for b in account.get("balances") or [] if b.get("asset_type") != "native"]
        return {"success": True, "exists": True, "trustlines": trustlines}

