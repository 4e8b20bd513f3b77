"""
Portfolio view of an account: display balances and per-asset allocation.

Allocation sums raw balance amounts across assets without price conversion,
so percentages describe unit share, not market value.
"""

from __future__ import annotations

from typing import Any

from stellar_merchant.horizon.models import parse_balances


def format_balances(account: dict[str, Any]) -> list[dict[str, Any]]:
    """[{asset, balance, issuer}] for the dashboard balance cards."""
    return [
        {"asset": b.code, "balance": b.balance, "issuer": b.asset_issuer}
        for b in parse_balances(account)
    ]


def asset_allocation(account: dict[str, Any]) -> list[dict[str, Any]]:
    """
    [{code, balance, value, percentage}] per balance line.

    A zero total yields 0 percentages.
    """
    balances = parse_balances(account)
    total = sum(b.value for b in balances)
    out: list[dict[str, Any]] = []
    for b in balances:
        pct = (b.value / total) * 100 if total > 0 else 0.0
        out.append(
            {
                "code": b.code,
                "balance": b.balance,
                "value": b.value,
                "percentage": round(pct, 2),
            }
        )
    return out
