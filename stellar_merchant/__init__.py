"""
Stellar Merchant Tool: backend for a merchant dashboard on the Stellar network.

Thin HTTP layer over Horizon (account balances, payment history, trustlines)
and an external signing service (keypairs, payments, trustline changes).
Nothing here signs transactions or holds keys.
"""

__version__ = "0.1.0"
