"""
Signing service client: pass-through to the external microservice that owns keys.

The service builds, signs and submits transactions; this module only forwards
parameters and returns its JSON verbatim. Secret keys travel in request bodies
and are never logged.
"""

from __future__ import annotations

from typing import Any

import httpx

from stellar_merchant.core.exceptions import ServiceUnavailableError, SigningServiceError
from stellar_merchant.horizon.models import NATIVE_ASSET_CODE
from stellar_merchant.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SEC = 30.0

CREATE_KEYPAIR_PATH = "/api/create-keypair"
CREATE_PAYMENT_PATH = "/api/create-payment"
SUBMIT_TRANSACTION_PATH = "/api/submit-transaction"
CREATE_TRUSTLINE_PATH = "/api/create-trustline"


class SigningServiceClient:
    """Synchronous client for the signing microservice endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or "").strip().rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout_sec))

    @property
    def configured(self) -> bool:
        return bool(self._base_url)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SigningServiceClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        """Call the service; raise SigningServiceError on transport or non-2xx, return parsed JSON."""
        if not self.configured:
            raise ServiceUnavailableError("Signing service is not configured (set SIGNING_SERVICE_URL)")
        url = f"{self._base_url}{path}"
        try:
            resp = self._client.request(method, url, json=body)
        except httpx.HTTPError as e:
            logger.error("signing_transport_error", path=path, error=str(e))
            raise SigningServiceError(f"Signing service request failed: {e}") from e

        if not resp.is_success:
            logger.warning(
                "signing_service_error",
                path=path,
                status=resp.status_code,
                body=resp.text[:500],
            )
            raise SigningServiceError.from_status(resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise SigningServiceError(
                "Signing service returned invalid JSON", upstream_status=resp.status_code
            ) from e
        if not isinstance(data, dict):
            raise SigningServiceError(
                "Signing service returned an unexpected payload", upstream_status=resp.status_code
            )
        logger.info("signing_service_ok", path=path, success=data.get("success"))
        return data

    def create_keypair(self) -> dict[str, Any]:
        """Ask the service for a fresh keypair ({publicKey, secretKey, ...})."""
        return self._request("GET", CREATE_KEYPAIR_PATH)

    def create_payment(
        self,
        source_secret: str,
        destination_address: str,
        amount: str,
        asset_code: str = NATIVE_ASSET_CODE,
        asset_issuer: str | None = None,
    ) -> dict[str, Any]:
        """Build and sign a payment; the service answers with {success, signedXDR}."""
        return self._request(
            "POST",
            CREATE_PAYMENT_PATH,
            {
                "sourceSecret": source_secret,
                "destinationAddress": destination_address,
                "amount": amount,
                "assetCode": asset_code,
                "assetIssuer": asset_issuer,
            },
        )

    def submit_transaction(self, signed_xdr: str) -> dict[str, Any]:
        return self._request("POST", SUBMIT_TRANSACTION_PATH, {"signedXDR": signed_xdr})

    def create_trustline(
        self,
        secret_key: str,
        asset_code: str,
        asset_issuer: str,
        limit: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "secretKey": secret_key,
            "assetCode": asset_code,
            "assetIssuer": asset_issuer,
        }
        if limit is not None:
            body["limit"] = limit
        return self._request("POST", CREATE_TRUSTLINE_PATH, body)

    def send_payment(
        self,
        source_secret: str,
        destination_address: str,
        amount: str,
        asset_code: str = NATIVE_ASSET_CODE,
        asset_issuer: str | None = None,
    ) -> dict[str, Any]:
        """
        Create then submit a payment.

        If creation reports success=false that result is returned unchanged and
        nothing is submitted. The API route runs the two steps itself so it can
        tell a rejected creation apart from the submit result.
        """
        created = self.create_payment(
            source_secret,
            destination_address,
            amount,
            asset_code=asset_code,
            asset_issuer=asset_issuer,
        )
        if not created.get("success"):
            logger.warning("signing_create_payment_rejected", error=created.get("error"))
            return created
        return self.submit_created_payment(created)

    def submit_created_payment(self, created: dict[str, Any]) -> dict[str, Any]:
        """Submit the signedXDR of an accepted create-payment result; the submit JSON is returned verbatim."""
        signed_xdr = created.get("signedXDR")
        if not signed_xdr:
            raise SigningServiceError("Signing service returned no signedXDR")
        return self.submit_transaction(signed_xdr)
