"""Common Stellar assets offered in the merchant UI (code, display name, issuer)."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from stellar_merchant.horizon.models import NATIVE_ASSET_CODE


@dataclass(frozen=True)
class Asset:
    code: str
    name: str
    issuer: str | None
    type: str


COMMON_ASSETS: tuple[Asset, ...] = (
    Asset(NATIVE_ASSET_CODE, "Stellar Lumens", None, "native"),
    Asset("USDC", "USD Coin", "GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN", "credit_alphanum4"),
    Asset("yUSDC", "Wrapped USDC", "GDGTVWSM4MGS4T7Z6W4RPWOCHE2I6RDFCIFZGS3DOA63LWQTRNZNTTFF", "credit_alphanum12"),
    Asset("yXLM", "Wrapped XLM", "GARDNV3Q7YGT4AKSDF25LT32YSCCW4EV22Y2TV3I2PU2MMXJTEDL5T55", "credit_alphanum12"),
    Asset("BTC", "Bitcoin", "GAUTUYY2THLF7SGITDFMXJVYH3LHDSMGEAKSBU267M2K7A3W543CKUEF", "credit_alphanum4"),
    Asset("ETH", "Ethereum", "GBFXOHVAS43OIWNIO7XLRJAHT3BICFEIKOJLZVXNT572MISM4CMGSOCC", "credit_alphanum4"),
)


def get_common_assets() -> list[dict[str, str | None]]:
    return [asdict(a) for a in COMMON_ASSETS]


def find_common_asset(code: str) -> Asset | None:
    """Look up a catalogue asset by code (exact match)."""
    return next((a for a in COMMON_ASSETS if a.code == code), None)
