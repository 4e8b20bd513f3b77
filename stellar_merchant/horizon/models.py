"""
Data models for Horizon responses.

Horizon owns these shapes; the models only pick out the fields the dashboard
needs and normalize the handful of per-type differences (native vs credit
balances, payment vs create_account records).
"""

from dataclasses import dataclass
from typing import Any

NATIVE_ASSET_CODE = "XLM"
ASSET_TYPE_NATIVE = "native"


@dataclass(frozen=True)
class Balance:
    """One entry of an account's `balances` array."""

    asset_type: str
    balance: str
    asset_code: str | None = None
    asset_issuer: str | None = None
    limit: str | None = None

    @property
    def is_native(self) -> bool:
        return self.asset_type == ASSET_TYPE_NATIVE

    @property
    def code(self) -> str:
        """Display code: XLM for native, asset_code otherwise."""
        if self.is_native:
            return NATIVE_ASSET_CODE
        return self.asset_code or "Unknown"

    @property
    def value(self) -> float:
        try:
            return float(self.balance)
        except (TypeError, ValueError):
            return 0.0

    @classmethod
    def from_horizon(cls, item: dict[str, Any]) -> "Balance":
        return cls(
            asset_type=item.get("asset_type") or ASSET_TYPE_NATIVE,
            balance=str(item.get("balance") or "0"),
            asset_code=item.get("asset_code"),
            asset_issuer=item.get("asset_issuer"),
            limit=item.get("limit"),
        )


@dataclass(frozen=True)
class PaymentRecord:
    """
    Normalized record from /accounts/{id}/payments.

    The endpoint mixes operation types: payment and path payments carry
    from/to/amount, create_account carries funder/account/starting_balance.
    Both are folded into the same fields.
    """

    id: str | None
    type: str
    created_at: str | None
    transaction_hash: str | None
    source: str | None
    destination: str | None
    amount: str | None
    asset_type: str | None
    asset_code: str | None
    asset_issuer: str | None

    @property
    def asset(self) -> str:
        if self.asset_code:
            return self.asset_code
        return NATIVE_ASSET_CODE

    @classmethod
    def from_horizon(cls, item: dict[str, Any]) -> "PaymentRecord":
        op_type = item.get("type") or item.get("operation_type") or "payment"
        if op_type == "create_account":
            source = item.get("funder") or item.get("from")
            destination = item.get("account") or item.get("to")
            amount = item.get("starting_balance") or item.get("amount")
        else:
            source = item.get("from")
            destination = item.get("to")
            amount = item.get("amount")
        return cls(
            id=item.get("id"),
            type=op_type,
            created_at=item.get("created_at"),
            transaction_hash=item.get("transaction_hash"),
            source=source,
            destination=destination,
            amount=amount,
            asset_type=item.get("asset_type"),
            asset_code=item.get("asset_code"),
            asset_issuer=item.get("asset_issuer"),
        )


def parse_balances(account: dict[str, Any]) -> list[Balance]:
    """Balances of a Horizon account document; [] when absent."""
    return [Balance.from_horizon(b) for b in account.get("balances") or [] if isinstance(b, dict)]
