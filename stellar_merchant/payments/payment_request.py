"""
Payment requests: SEP-0007 `web+stellar:pay` URIs for QR codes.

The merchant enters destination, amount, asset and memo; the service returns
a URI any Stellar wallet can open. The QR image itself is drawn by the client.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any
from urllib.parse import quote

from stellar_merchant.core.account_utils import is_valid_public_key
from stellar_merchant.core.exceptions import InvalidRequestError
from stellar_merchant.horizon.models import NATIVE_ASSET_CODE
from stellar_merchant.logging import get_logger
from stellar_merchant.logging.logger import short_account
from stellar_merchant.payments.assets import find_common_asset

logger = get_logger(__name__)

PAY_URI_PREFIX = "web+stellar:pay?"

# Stellar amounts are int64 stroops: 7 decimal places
MAX_AMOUNT_DECIMALS = 7
MAX_TEXT_MEMO_BYTES = 28

MEMO_TYPES = {
    "text": "MEMO_TEXT",
    "id": "MEMO_ID",
    "hash": "MEMO_HASH",
    "return": "MEMO_RETURN",
}

# encodeURIComponent's unreserved set
_URI_COMPONENT_SAFE = "-_.!~*'()"

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def new_payment_id(now_ms: int | None = None) -> str:
    """pay_<base-36 epoch millis>."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return "pay_" + _to_base36(now_ms)


def validate_amount(amount: Any) -> str:
    """Return the amount in plain decimal notation; raise unless it is a positive number with <= 7 decimals."""
    raw = str(amount).strip() if amount is not None else ""
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise InvalidRequestError("Please enter a valid positive amount") from None
    if not value.is_finite() or value <= 0:
        raise InvalidRequestError("Please enter a valid positive amount")
    value = value.normalize()
    if -value.as_tuple().exponent > MAX_AMOUNT_DECIMALS:
        raise InvalidRequestError(f"Amount supports at most {MAX_AMOUNT_DECIMALS} decimal places")
    # plain notation: wallets reject exponents in the pay URI
    return format(value, "f")


def validate_memo(memo: str, memo_type: str) -> None:
    if memo_type not in MEMO_TYPES:
        raise InvalidRequestError(f"Unsupported memo type: {memo_type}")
    if not memo:
        return
    if memo_type == "text" and len(memo.encode("utf-8")) > MAX_TEXT_MEMO_BYTES:
        raise InvalidRequestError(f"Text memo must be at most {MAX_TEXT_MEMO_BYTES} bytes")
    if memo_type == "id" and not (memo.isascii() and memo.isdigit() and int(memo) < 2**64):
        raise InvalidRequestError("ID memo must be an unsigned 64-bit integer")


def build_payment_uri(
    destination: str,
    amount: str,
    asset_code: str = NATIVE_ASSET_CODE,
    asset_issuer: str | None = None,
    memo: str = "",
    memo_type: str = "text",
) -> str:
    """
    Build a web+stellar:pay URI.

    Non-native assets add asset_code (and asset_issuer when known); a memo is
    URL-encoded and memo_type is only written for non-text memos.
    """
    uri = f"{PAY_URI_PREFIX}destination={destination}&amount={amount}"
    if asset_code and asset_code != NATIVE_ASSET_CODE:
        uri += f"&asset_code={quote(asset_code, safe=_URI_COMPONENT_SAFE)}"
        if asset_issuer:
            uri += f"&asset_issuer={asset_issuer}"
    if memo:
        uri += f"&memo={quote(memo, safe=_URI_COMPONENT_SAFE)}"
        if memo_type != "text":
            uri += f"&memo_type={MEMO_TYPES[memo_type]}"
    return uri


def create_payment_request(
    destination_address: str | None,
    amount: Any,
    asset_code: str | None = NATIVE_ASSET_CODE,
    asset_issuer: str | None = None,
    memo: str | None = "",
    memo_type: str | None = "text",
) -> dict[str, Any]:
    """
    Validate inputs and return the payment request payload.

    A catalogue asset given without an issuer picks up the catalogue issuer.

    Raises:
        InvalidRequestError: missing destination/amount, bad address, amount or memo.
    """
    destination = (destination_address or "").strip()
    if not destination or amount in (None, ""):
        raise InvalidRequestError("Missing required parameters")
    if not is_valid_public_key(destination):
        raise InvalidRequestError("Invalid destination address")
    amount_str = validate_amount(amount)

    code = (asset_code or NATIVE_ASSET_CODE).strip()
    issuer = (asset_issuer or "").strip() or None
    if code != NATIVE_ASSET_CODE and issuer is None:
        known = find_common_asset(code)
        issuer = known.issuer if known else None
    if issuer is not None and not is_valid_public_key(issuer):
        raise InvalidRequestError("Invalid asset issuer")

    memo_str = memo or ""
    kind = (memo_type or "text").strip().lower()
    validate_memo(memo_str, kind)

    payment_url = build_payment_uri(destination, amount_str, code, issuer, memo_str, kind)
    payment_id = new_payment_id()
    logger.info(
        "payment_request_created",
        payment_id=payment_id,
        account_id=short_account(destination),
        asset_code=code,
    )
    return {
        "success": True,
        "paymentId": payment_id,
        "paymentUrl": payment_url,
        "destinationAddress": destination,
        "amount": amount_str,
        "assetCode": code,
        "assetIssuer": issuer if code != NATIVE_ASSET_CODE else None,
        "memo": memo_str,
        "memoType": kind,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
