"""
Core utilities: exceptions and shared validation helpers.

Used across the Horizon client, signing client and API server.
"""

from stellar_merchant.core.exceptions import (
    AccountNotFoundError,
    InvalidRequestError,
    MerchantError,
    ServiceUnavailableError,
    SigningServiceError,
    UpstreamError,
)

__all__ = [
    "AccountNotFoundError",
    "InvalidRequestError",
    "MerchantError",
    "ServiceUnavailableError",
    "SigningServiceError",
    "UpstreamError",
]
