"""
Account analytics for the merchant dashboard.

Client-side style aggregation of Horizon responses: balances and allocation,
daily payment volume, per-asset counts, and the formatted payment feed.
Modules: portfolio, activity, payment_feed, analytics_pipeline.
"""

from stellar_merchant.analytics.analytics_pipeline import (
    build_analytics,
    build_dashboard,
    run_account_analytics,
    run_dashboard,
    search_payments,
)

__all__ = [
    "build_analytics",
    "build_dashboard",
    "run_account_analytics",
    "run_dashboard",
    "search_payments",
]
