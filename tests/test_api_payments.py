"""
API tests: payment history, search, send, payment requests and the asset catalogue.
"""

from __future__ import annotations

from conftest import CUSTOMER, MERCHANT, SOURCE_SECRET, USDC_ISSUER


def test_payments_history(client, fake_horizon):
    data = client.get("/api/payments", params={"publicKey": MERCHANT, "limit": 2}).json()
    assert data["success"] is True
    assert [p["id"] for p in data["payments"]] == ["300", "200"]
    assert fake_horizon.requests[-1].url.params["order"] == "desc"


def test_payments_accepts_account_id_alias(client):
    data = client.get("/api/payments", params={"accountId": MERCHANT}).json()
    assert len(data["payments"]) == 3


def test_payments_uses_default_limit(client, fake_horizon):
    client.get("/api/payments", params={"publicKey": MERCHANT})
    assert fake_horizon.requests[-1].url.params["limit"] == "10"


def test_payments_unfunded_account(client):
    data = client.get("/api/payments", params={"publicKey": CUSTOMER}).json()
    assert data["success"] is False
    assert data["exists"] is False
    assert data["payments"] == []


def test_payments_missing_key(client):
    resp = client.get("/api/payments")
    assert resp.status_code == 400


def test_payments_bad_limit_is_400(client):
    resp = client.get("/api/payments", params={"publicKey": MERCHANT, "limit": "lots"})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid request: query.limit")


def test_post_payments_status(client):
    assert client.post("/api/payments").json() == {"success": True, "message": "Payment endpoint is working"}


def test_payment_search(client):
    data = client.get(
        "/api/payments/search",
        params={"publicKey": MERCHANT, "search": "usdc", "status": "success"},
    ).json()
    assert data["total"] == 3
    assert [p["id"] for p in data["payments"]] == ["300"]
    assert data["payments"][0]["date"] == "2024-03-02 10:00:00 UTC"


def test_send_payment(client, fake_signing):
    resp = client.post(
        "/api/payment",
        json={
            "sourceSecret": SOURCE_SECRET,
            "destinationAddress": CUSTOMER,
            "amount": 12.5,
            "assetCode": "USDC",
            "assetIssuer": USDC_ISSUER,
        },
    )
    assert resp.status_code == 200
    assert resp.json()["transactionId"] == "tx1"
    assert fake_signing.paths() == ["/api/create-payment", "/api/submit-transaction"]
    assert fake_signing.calls[0][2]["amount"] == "12.5"


def test_send_payment_missing_fields(client, fake_signing):
    resp = client.post("/api/payment", json={"destinationAddress": CUSTOMER, "amount": "1"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Missing required parameters"}
    assert fake_signing.calls == []


def test_send_payment_rejected_by_signer(client, fake_signing):
    fake_signing.responses["/api/create-payment"] = (200, {"success": False, "error": "op_no_destination"})
    resp = client.post(
        "/api/payment",
        json={"sourceSecret": SOURCE_SECRET, "destinationAddress": CUSTOMER, "amount": "1"},
    )
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "op_no_destination"}


def test_payment_request(client):
    resp = client.post(
        "/api/payment-request",
        json={"destinationAddress": MERCHANT, "amount": "5", "assetCode": "USDC", "memo": "order 9"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["assetIssuer"] == USDC_ISSUER
    assert data["paymentUrl"] == (
        f"web+stellar:pay?destination={MERCHANT}&amount=5"
        f"&asset_code=USDC&asset_issuer={USDC_ISSUER}&memo=order%209"
    )


def test_payment_request_invalid_destination(client):
    resp = client.post("/api/payment-request", json={"destinationAddress": "GBAD", "amount": "5"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid destination address"


def test_assets(client):
    data = client.get("/api/assets").json()
    assert data["success"] is True
    assert data["assets"][0] == {"code": "XLM", "name": "Stellar Lumens", "issuer": None, "type": "native"}


def test_send_payment_submit_result_returned_as_is(client, fake_signing):
    """Only a rejected creation answers 500; the submit answer passes through with 200."""
    body = {"sourceSecret": SOURCE_SECRET, "destinationAddress": CUSTOMER, "amount": "1"}

    fake_signing.responses["/api/submit-transaction"] = (200, {"hash": "tx1", "ledger": 42})
    resp = client.post("/api/payment", json=body)
    assert resp.status_code == 200
    assert resp.json() == {"hash": "tx1", "ledger": 42}

    fake_signing.responses["/api/submit-transaction"] = (200, {"success": False, "error": "tx_bad_seq"})
    resp = client.post("/api/payment", json=body)
    assert resp.status_code == 200
    assert resp.json()["error"] == "tx_bad_seq"


def test_payments_zero_limit_clamped_to_one(client, fake_horizon):
    data = client.get("/api/payments", params={"publicKey": MERCHANT, "limit": 0}).json()
    assert fake_horizon.requests[-1].url.params["limit"] == "1"
    assert len(data["payments"]) == 1


def test_payment_request_amount_in_plain_notation(client):
    resp = client.post("/api/payment-request", json={"destinationAddress": MERCHANT, "amount": 1e-07})
    assert resp.status_code == 200
    data = resp.json()
    assert data["amount"] == "0.0000001"
    assert data["paymentUrl"] == f"web+stellar:pay?destination={MERCHANT}&amount=0.0000001"


def test_payment_request_unicode_digit_memo_id(client):
    resp = client.post(
        "/api/payment-request",
        json={"destinationAddress": MERCHANT, "amount": "1", "memo": "²", "memoType": "id"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "ID memo must be an unsigned 64-bit integer"
