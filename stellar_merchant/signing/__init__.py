"""
Signing service access. Keys and signatures live in the external service only.
"""

from stellar_merchant.signing.client import SigningServiceClient

__all__ = ["SigningServiceClient"]
