"""
Horizon access: REST client and response models.
"""

from stellar_merchant.horizon.client import HorizonClient
from stellar_merchant.horizon.models import Balance, PaymentRecord, parse_balances

__all__ = ["Balance", "HorizonClient", "PaymentRecord", "parse_balances"]
