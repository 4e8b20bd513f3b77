"""Stellar account validation utilities."""

from __future__ import annotations

from stellar_sdk import StrKey

from stellar_merchant.core.exceptions import InvalidRequestError


def is_valid_public_key(public_key: str) -> bool:
    """Return True if public_key is a valid Stellar account id (G... strkey with checksum)."""
    try:
        return StrKey.is_valid_ed25519_public_key(public_key.strip())
    except Exception:
        return False


def require_public_key(public_key: str | None) -> str:
    """Strip and validate a public key; raise InvalidRequestError otherwise."""
    key = (public_key or "").strip()
    if not key:
        raise InvalidRequestError("Public key is required")
    if not is_valid_public_key(key):
        raise InvalidRequestError("Invalid Stellar public key")
    return key
