"""
Tests for the Python API client, driven through the FastAPI TestClient.
"""

from __future__ import annotations

import httpx
import pytest

from conftest import CUSTOMER, MERCHANT, SOURCE_SECRET, USDC_ISSUER


@pytest.fixture
def api(client):
    from stellar_merchant.api_client import MerchantApiClient

    return MerchantApiClient("http://testserver", client=client)


def test_health_and_account(api):
    assert api.health() == {"status": "ok"}
    assert api.get_account(MERCHANT)["exists"] is True
    assert api.check_account(CUSTOMER)["exists"] is False


def test_unfunded_account_is_not_an_exception(api):
    result = api.get_account(CUSTOMER)
    assert result["success"] is False
    assert result["exists"] is False


def test_error_response_raises(api):
    from stellar_merchant.api_client import MerchantApiClientError

    with pytest.raises(MerchantApiClientError) as exc_info:
        api.get_account("bogus")
    assert exc_info.value.status_code == 400
    assert "Invalid Stellar public key" in str(exc_info.value)


def test_balance(api):
    assert api.get_asset_balance(MERCHANT)["balance"] == "100.0000000"
    assert api.get_asset_balance(MERCHANT, "USDC", USDC_ISSUER)["balance"] == "50.0000000"


def test_payments_and_search(api):
    assert len(api.get_payment_history(MERCHANT, limit=2)["payments"]) == 2
    assert [p["id"] for p in api.search_payments(MERCHANT, search="usdc")["payments"]] == ["300"]


def test_payment_request_and_assets(api):
    result = api.create_payment_request(MERCHANT, "1.5", asset_code="USDC", asset_issuer=USDC_ISSUER)
    assert result["paymentUrl"].startswith("web+stellar:pay?")
    assert {a["code"] for a in api.get_common_assets()} >= {"XLM", "USDC"}


def test_signing_routes(api, fake_signing):
    assert api.create_keypair()["publicKey"] == CUSTOMER
    assert api.send_payment(SOURCE_SECRET, CUSTOMER, "2")["hash"] == "tx1"
    assert api.add_trustline(SOURCE_SECRET, "USDC", USDC_ISSUER, limit="100")["hash"] == "trust1"
    assert fake_signing.calls[-1][2]["limit"] == "100"


def test_trustlines_dashboard_analytics(api):
    assert len(api.get_trustlines(MERCHANT)["trustlines"]) == 2
    assert api.get_dashboard(MERCHANT)["publicKey"] == MERCHANT
    assert api.get_analytics(MERCHANT)["assetCounts"]


def test_transport_error_wrapped():
    from stellar_merchant.api_client import MerchantApiClient, MerchantApiClientError

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with MerchantApiClient(client=httpx.Client(transport=httpx.MockTransport(refuse))) as api:
        with pytest.raises(MerchantApiClientError, match="Request failed"):
            api.health()


def test_close_leaves_injected_client_open():
    from stellar_merchant.api_client import MerchantApiClient

    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"status": "ok"})))
    with MerchantApiClient("http://testserver", client=http) as api:
        assert api.health() == {"status": "ok"}
    assert http.is_closed is False
    http.close()


def test_close_closes_owned_client():
    from stellar_merchant.api_client import MerchantApiClient

    api = MerchantApiClient("http://testserver")
    api.close()
    assert api._client.is_closed is True
