"""
API server package: HTTP/JSON interface for the merchant dashboard.

Routes proxy to Horizon (accounts, balances, payments, trustlines) and to the
signing service (keypairs, payments, trustline changes), and serve the
dashboard/analytics aggregations.
"""
