"""
Structured logging for the Stellar Merchant Tool.

JSON logs with timestamp, event_type and account_id.
Use get_logger() in all modules for aggregation-friendly output.
"""

from stellar_merchant.logging.logger import bind_account, get_logger

__all__ = ["bind_account", "get_logger"]
