"""
Payment feed: normalize Horizon payment records for the payments/dashboard pages
and filter them by free-text search and status.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Iterable

from stellar_merchant.horizon.models import PaymentRecord

UNKNOWN = "Unknown"

STATUS_ALL = "all"
STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"

DIRECTION_INCOMING = "incoming"
DIRECTION_OUTGOING = "outgoing"


def parse_created_at(created_at: str | None) -> datetime | None:
    """Parse Horizon's ISO 8601 timestamp (trailing Z) into an aware UTC datetime."""
    if not created_at:
        return None
    try:
        dt = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(created_at: str | None) -> str:
    dt = parse_created_at(created_at)
    if dt is None:
        return ""
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


def format_address(address: str | None) -> str:
    """GABC...WXYZ for display; "Unknown Address" when missing."""
    if not address or address == UNKNOWN:
        return "Unknown Address"
    if len(address) <= 8:
        return address
    return f"{address[:4]}...{address[-4:]}"


def format_payment(item: dict[str, Any]) -> dict[str, Any]:
    """Shape one raw Horizon record the way the payments page renders it."""
    record = PaymentRecord.from_horizon(item)
    tx_hash = record.transaction_hash or ""
    payment_id = record.id or tx_hash or uuid.uuid4().hex[:8]
    status = STATUS_FAILED if item.get("transaction_successful") is False else STATUS_SUCCESS
    return {
        "id": payment_id,
        "date": format_timestamp(record.created_at),
        "createdAt": record.created_at,
        "amount": record.amount or "0",
        "asset": record.asset,
        "from": record.source or UNKNOWN,
        "to": record.destination or UNKNOWN,
        "memo": item.get("memo") or "",
        "hash": tx_hash or payment_id,
        "status": status,
        "operationType": record.type,
        "transactionHash": tx_hash,
    }


def payment_direction(payment: dict[str, Any], address: str) -> str:
    """incoming when the account is the receiver, outgoing otherwise."""
    if payment.get("to") == address:
        return DIRECTION_INCOMING
    return DIRECTION_OUTGOING


def filter_payments(
    payments: Iterable[dict[str, Any]],
    search: str = "",
    status: str = STATUS_ALL,
) -> list[dict[str, Any]]:
    """Case-insensitive substring match over id, memo, amount, asset, from and to; then status."""
    out = list(payments)
    term = (search or "").strip().lower()
    if term:
        fields = ("id", "memo", "amount", "asset", "from", "to")
        out = [p for p in out if any(term in str(p.get(f) or "").lower() for f in fields)]
    wanted = (status or STATUS_ALL).strip().lower()
    if wanted != STATUS_ALL:
        out = [p for p in out if p.get("status") == wanted]
    return out
