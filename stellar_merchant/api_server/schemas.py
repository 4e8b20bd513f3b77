"""
Request bodies for the POST routes.

Fields use the camelCase names the web frontend sends. Everything is optional
at the model level so a missing field answers 400 "Missing required
parameters" from the handler instead of a 422 validation dump.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Amount = str | int | float | None


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentRequestBody(CamelModel):
    """POST /api/payment-request body."""

    destination_address: str | None = Field(None, description="Account that receives the payment (G...)")
    amount: Amount = Field(None, description="Positive amount, up to 7 decimals")
    asset_code: str = Field("XLM", description="Asset code; XLM for native")
    asset_issuer: str | None = Field(None, description="Issuer for non-native assets")
    memo: str = Field("", description="Optional memo")
    memo_type: str = Field("text", description="text | id | hash | return")


class SendPaymentBody(CamelModel):
    """POST /api/payment body. The secret goes to the signing service and nowhere else."""

    source_secret: str | None = Field(None, description="Secret seed of the paying account (S...)")
    destination_address: str | None = None
    amount: Amount = None
    asset_code: str = "XLM"
    asset_issuer: str | None = None


class TrustlineBody(CamelModel):
    """POST /api/trustline and /api/trustlines body."""

    secret_key: str | None = Field(None, description="Secret seed of the trusting account (S...)")
    asset_code: str | None = None
    asset_issuer: str | None = None
    limit: Amount = Field(None, description="Trust limit; signing service default when omitted")

    def missing_required(self) -> bool:
        return not (self.secret_key and self.asset_code and self.asset_issuer)
