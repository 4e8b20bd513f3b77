"""
Payment requests and the common-asset catalogue.
"""

from stellar_merchant.payments.assets import COMMON_ASSETS, Asset, find_common_asset, get_common_assets
from stellar_merchant.payments.payment_request import build_payment_uri, create_payment_request

__all__ = [
    "COMMON_ASSETS",
    "Asset",
    "build_payment_uri",
    "create_payment_request",
    "find_common_asset",
    "get_common_assets",
]
