"""
Pytest fixtures for merchant tool tests.

Horizon and the signing service are replaced by in-memory fakes served through
httpx.MockTransport, so no test touches the network.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

HORIZON_URL = "https://horizon.test"
SIGNING_URL = "https://signer.test"

# Valid account ids (checksummed strkeys)
MERCHANT = "GARDNV3Q7YGT4AKSDF25LT32YSCCW4EV22Y2TV3I2PU2MMXJTEDL5T55"
CUSTOMER = "GAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAWHF"
USDC_ISSUER = "GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN"
BTC_ISSUER = "GAUTUYY2THLF7SGITDFMXJVYH3LHDSMGEAKSBU267M2K7A3W543CKUEF"

SOURCE_SECRET = "SBTESTSECRETNOTREALXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX"


def make_account(account_id: str = MERCHANT) -> dict[str, Any]:
    return {
        "id": account_id,
        "account_id": account_id,
        "sequence": "123",
        "balances": [
            {"balance": "100.0000000", "asset_type": "native"},
            {
                "balance": "50.0000000",
                "limit": "922337203685.4775807",
                "asset_type": "credit_alphanum4",
                "asset_code": "USDC",
                "asset_issuer": USDC_ISSUER,
            },
            {
                "balance": "50.0000000",
                "limit": "1000.0000000",
                "asset_type": "credit_alphanum4",
                "asset_code": "BTC",
                "asset_issuer": BTC_ISSUER,
            },
        ],
    }


def make_payments(account_id: str = MERCHANT) -> list[dict[str, Any]]:
    """Newest first, as Horizon returns them with order=desc."""
    return [
        {
            "id": "300",
            "type": "payment",
            "created_at": "2024-03-02T10:00:00Z",
            "transaction_hash": "hash300",
            "transaction_successful": True,
            "asset_type": "credit_alphanum4",
            "asset_code": "USDC",
            "asset_issuer": USDC_ISSUER,
            "from": CUSTOMER,
            "to": account_id,
            "amount": "25.0000000",
        },
        {
            "id": "200",
            "type": "payment",
            "created_at": "2024-03-01T18:30:00Z",
            "transaction_hash": "hash200",
            "transaction_successful": True,
            "asset_type": "native",
            "from": account_id,
            "to": CUSTOMER,
            "amount": "10.5000000",
        },
        {
            "id": "100",
            "type": "create_account",
            "created_at": "2024-03-01T08:00:00Z",
            "transaction_hash": "hash100",
            "transaction_successful": True,
            "funder": CUSTOMER,
            "account": account_id,
            "starting_balance": "2.0000000",
        },
    ]


class FakeHorizon:
    """Serves /accounts/{id} and /accounts/{id}/payments from dicts; records requests."""

    def __init__(self) -> None:
        self.accounts: dict[str, dict[str, Any]] = {MERCHANT: make_account(MERCHANT)}
        self.payments: dict[str, list[dict[str, Any]]] = {MERCHANT: make_payments(MERCHANT)}
        self.fail_status: int | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, json={"title": "Upstream failure"})
        parts = [p for p in request.url.path.split("/") if p]
        if len(parts) >= 2 and parts[0] == "accounts":
            account_id = parts[1]
            if account_id not in self.accounts:
                return httpx.Response(404, json={"title": "Resource Missing", "status": 404})
            if len(parts) == 2:
                return httpx.Response(200, json=self.accounts[account_id])
            if len(parts) == 3 and parts[2] == "payments":
                limit = int(request.url.params.get("limit", "10"))
                records = self.payments.get(account_id, [])[:limit]
                return httpx.Response(200, json={"_embedded": {"records": records}})
        return httpx.Response(404, json={"title": "Resource Missing"})


class FakeSigningService:
    """Signing service stand-in: canned JSON per path, records request bodies."""

    def __init__(self) -> None:
        self.responses: dict[str, tuple[int, dict[str, Any]]] = {
            "/api/create-keypair": (200, {"success": True, "publicKey": CUSTOMER, "secretKey": SOURCE_SECRET}),
            "/api/create-payment": (200, {"success": True, "signedXDR": "AAAA-signed-xdr"}),
            "/api/submit-transaction": (
                200,
                {"success": True, "transactionId": "tx1", "hash": "tx1", "ledger": 42},
            ),
            "/api/create-trustline": (200, {"success": True, "hash": "trust1", "ledger": 43}),
        }
        self.calls: list[tuple[str, str, Any]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, body))
        status, payload = self.responses.get(request.url.path, (404, {"error": "not found"}))
        return httpx.Response(status, json=payload)

    def paths(self) -> list[str]:
        return [path for _, path, _ in self.calls]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate settings from the developer's environment."""
    for name in (
        "STELLAR_NETWORK",
        "HORIZON_URL",
        "SIGNING_SERVICE_URL",
        "NEXT_PUBLIC_API_URL",
        "REQUEST_TIMEOUT_SEC",
        "API_HOST",
        "API_PORT",
        "PAYMENT_HISTORY_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    from stellar_merchant.config import reset_settings

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fake_horizon() -> FakeHorizon:
    return FakeHorizon()


@pytest.fixture
def fake_signing() -> FakeSigningService:
    return FakeSigningService()


@pytest.fixture
def horizon_client(fake_horizon):
    from stellar_merchant.horizon.client import HorizonClient

    http = httpx.Client(transport=httpx.MockTransport(fake_horizon.handler))
    client = HorizonClient(HORIZON_URL, client=http)
    yield client
    http.close()


@pytest.fixture
def signing_client(fake_signing):
    from stellar_merchant.signing.client import SigningServiceClient

    http = httpx.Client(transport=httpx.MockTransport(fake_signing.handler))
    client = SigningServiceClient(SIGNING_URL, client=http)
    yield client
    http.close()


@pytest.fixture
def client(horizon_client, signing_client):
    """FastAPI TestClient with Horizon and the signing service swapped for the fakes."""
    from fastapi.testclient import TestClient

    from stellar_merchant.api_server.dependencies import get_horizon_client, get_signing_client
    from stellar_merchant.api_server.server import app

    app.dependency_overrides[get_horizon_client] = lambda: horizon_client
    app.dependency_overrides[get_signing_client] = lambda: signing_client
    yield TestClient(app)
    app.dependency_overrides.clear()
