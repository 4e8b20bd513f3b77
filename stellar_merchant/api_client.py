"""
Stellar Merchant Tool API Python client.

Uses httpx. Mirrors the routes in stellar_merchant.api_server.

Usage:
    from stellar_merchant.api_client import MerchantApiClient
    client = MerchantApiClient("http://localhost:8000")
    account = client.get_account("GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN")
"""

from __future__ import annotations

from typing import Any

import httpx


class MerchantApiClientError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, response: httpx.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class MerchantApiClient:
    """
    Client for the merchant API.

    Responses with a non-2xx status raise MerchantApiClientError. A 200 with
    success=false (e.g. an unfunded account) is returned as-is.
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 30.0, client: httpx.Client | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the underlying client, unless it was passed in."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "MerchantApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            resp = self._client.request(method, url, params=params, json=json)
        except httpx.HTTPError as e:
            raise MerchantApiClientError(f"Request failed: {e}") from e
        if not resp.is_success:
            detail = resp.text
            if resp.headers.get("content-type", "").startswith("application/json"):
                body = resp.json()
                if isinstance(body, dict):
                    detail = body.get("error") or body.get("detail") or detail
            raise MerchantApiClientError(
                f"API error: {detail}",
                status_code=resp.status_code,
                response=resp,
            )
        return resp

    def health(self) -> dict[str, str]:
        """Liveness check."""
        return self._request("GET", "/health").json()

    def get_account(self, public_key: str) -> dict[str, Any]:
        return self._request("GET", "/api/account", params={"publicKey": public_key}).json()

    def check_account(self, public_key: str) -> dict[str, Any]:
        """{success, exists, message}."""
        return self._request("GET", "/api/account/check", params={"publicKey": public_key}).json()

    def get_payment_history(self, public_key: str, limit: int = 10) -> dict[str, Any]:
        return self._request("GET", "/api/payments", params={"publicKey": public_key, "limit": limit}).json()

    def search_payments(self, public_key: str, search: str = "", status: str = "all", limit: int = 10) -> dict[str, Any]:
        params = {"publicKey": public_key, "search": search, "status": status, "limit": limit}
        return self._request("GET", "/api/payments/search", params=params).json()

    def get_asset_balance(self, public_key: str, asset_code: str = "XLM", asset_issuer: str | None = None) -> dict[str, Any]:
        params = {"publicKey": public_key, "assetCode": asset_code, "assetIssuer": asset_issuer}
        return self._request("GET", "/api/balance", params=params).json()

    def get_common_assets(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/assets").json()["assets"]

    def create_payment_request(
        self,
        destination_address: str,
        amount: str,
        asset_code: str = "XLM",
        asset_issuer: str | None = None,
        memo: str = "",
        memo_type: str = "text",
    ) -> dict[str, Any]:
        """web+stellar:pay URI for a QR code."""
        body: dict[str, Any] = {
            "destinationAddress": destination_address,
            "amount": amount,
            "assetCode": asset_code,
            "memo": memo,
            "memoType": memo_type,
        }
        if asset_issuer is not None:
            body["assetIssuer"] = asset_issuer
        return self._request("POST", "/api/payment-request", json=body).json()

    def send_payment(
        self,
        source_secret: str,
        destination_address: str,
        amount: str,
        asset_code: str = "XLM",
        asset_issuer: str | None = None,
    ) -> dict[str, Any]:
        body = {
            "sourceSecret": source_secret,
            "destinationAddress": destination_address,
            "amount": amount,
            "assetCode": asset_code,
            "assetIssuer": asset_issuer,
        }
        return self._request("POST", "/api/payment", json=body).json()

    def get_trustlines(self, public_key: str) -> dict[str, Any]:
        return self._request("GET", "/api/trustlines", params={"publicKey": public_key}).json()

    def add_trustline(self, secret_key: str, asset_code: str, asset_issuer: str, limit: str | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {"secretKey": secret_key, "assetCode": asset_code, "assetIssuer": asset_issuer}
        if limit is not None:
            body["limit"] = limit
        return self._request("POST", "/api/trustline", json=body).json()

    def create_keypair(self) -> dict[str, Any]:
        return self._request("GET", "/api/keypair").json()

    def get_dashboard(self, public_key: str) -> dict[str, Any]:
        return self._request("GET", "/api/dashboard", params={"publicKey": public_key}).json()

    def get_analytics(self, public_key: str) -> dict[str, Any]:
        return self._request("GET", "/api/analytics", params={"publicKey": public_key}).json()


if __name__ == "__main__":
    client = MerchantApiClient("http://localhost:8000")

    print("Health:", client.health())

    try:
        account = client.get_account("GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN")
        print("Exists:", account.get("exists"), "balances:", len((account.get("account") or {}).get("balances", [])))
    except MerchantApiClientError as e:
        print("Lookup failed:", e, e.status_code)
