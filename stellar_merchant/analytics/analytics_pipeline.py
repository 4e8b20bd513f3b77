"""
Analytics pipeline: account + payments from Horizon -> dashboard/analytics payloads.

Single entrypoint for the API's dashboard, analytics and payment search views:
one account lookup, one payments page, then pure reshaping.
"""

from __future__ import annotations

from typing import Any

from stellar_merchant.analytics.activity import daily_volume, transaction_counts, transaction_rows
from stellar_merchant.analytics.payment_feed import filter_payments, format_payment, payment_direction
from stellar_merchant.analytics.portfolio import asset_allocation, format_balances
from stellar_merchant.horizon.client import DEFAULT_PAYMENT_LIMIT, HorizonClient
from stellar_merchant.logging import bind_account


def build_dashboard(address: str, account: dict[str, Any], records: list[dict[str, Any]]) -> dict[str, Any]:
    """Balances plus every fetched payment, tagged incoming/outgoing relative to address."""
    recent = []
    for item in records:
        payment = format_payment(item)
        payment["direction"] = payment_direction(payment, address)
        recent.append(payment)
    return {
        "success": True,
        "exists": True,
        "publicKey": address,
        "balances": format_balances(account),
        "transactions": recent,
    }


def build_analytics(account: dict[str, Any], records: list[dict[str, Any]]) -> dict[str, Any]:
    rows = transaction_rows(records)
    return {
        "success": True,
        "exists": True,
        "assets": asset_allocation(account),
        "transactions": rows,
        "dailyVolume": daily_volume(rows),
        "assetCounts": transaction_counts(rows),
    }


def run_dashboard(horizon: HorizonClient, public_key: str, limit: int | None = DEFAULT_PAYMENT_LIMIT) -> dict[str, Any]:
    """
    Fetch account and payments, return the dashboard payload.

    Raises AccountNotFoundError for an unfunded account (no payments lookup).
    """
    account = horizon.load_account(public_key)
    records = horizon.fetch_payment_records(public_key, limit)
    bind_account(public_key, __name__).info("dashboard_built", record_count=len(records))
    return build_dashboard(public_key.strip(), account, records)


def run_account_analytics(
    horizon: HorizonClient,
    public_key: str,
    limit: int | None = DEFAULT_PAYMENT_LIMIT,
) -> dict[str, Any]:
    account = horizon.load_account(public_key)
    records = horizon.fetch_payment_records(public_key, limit)
    bind_account(public_key, __name__).info("analytics_built", record_count=len(records))
    return build_analytics(account, records)


def search_payments(
    horizon: HorizonClient,
    public_key: str,
    search: str = "",
    status: str = "all",
    limit: int | None = DEFAULT_PAYMENT_LIMIT,
) -> dict[str, Any]:
    """Formatted payment history filtered by search term and status."""
    history = horizon.get_payment_history(public_key, limit)
    key = public_key.strip()
    payments = []
    for item in history["payments"]:
        payment = format_payment(item)
        payment["direction"] = payment_direction(payment, key)
        payments.append(payment)
    filtered = filter_payments(payments, search=search, status=status)
    return {
        "success": True,
        "exists": True,
        "total": len(payments),
        "payments": filtered,
    }
