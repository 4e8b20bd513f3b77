"""
Payment activity aggregation: per-transaction rows, daily volume, counts per asset.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any, Iterable

from stellar_merchant.analytics.payment_feed import parse_created_at
from stellar_merchant.horizon.models import PaymentRecord

# Stroop precision
VOLUME_DECIMALS = 7


def _amount(raw: str | None) -> float:
    try:
        return float(raw or 0)
    except (TypeError, ValueError):
        return 0.0


def transaction_rows(records: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """[{date, amount, asset}] with date as YYYY-MM-DD (UTC). Records without a timestamp are skipped."""
    rows: list[dict[str, Any]] = []
    for item in records:
        record = PaymentRecord.from_horizon(item)
        dt = parse_created_at(record.created_at)
        if dt is None:
            continue
        rows.append(
            {
                "date": dt.date().isoformat(),
                "amount": _amount(record.amount),
                "asset": record.asset,
            }
        )
    return rows


def daily_volume(rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Sum of amounts per date, oldest first."""
    by_date: dict[str, float] = defaultdict(float)
    for row in rows:
        by_date[row["date"]] += row["amount"]
    return [
        {"date": date, "volume": round(volume, VOLUME_DECIMALS)}
        for date, volume in sorted(by_date.items())
    ]


def transaction_counts(rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Number of transactions per asset, in first-seen order."""
    counts = Counter(row["asset"] for row in rows)
    return [{"asset": asset, "count": count} for asset, count in counts.items()]
