"""
Static Abucoins capability metadata.

Describes the markets the adapter can trade and what it needs to run.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class MinimalOrder(BaseModel):
    """Smallest order accepted on a market."""

    amount: Decimal
    unit: str = "asset"

    model_config = ConfigDict(frozen=True)


class MarketInfo(BaseModel):
    """A tradable market as (currency, asset)."""

    pair: tuple[str, str] = Field(description="(currency, asset)")
    minimal_order: MinimalOrder

    model_config = ConfigDict(frozen=True)


class ExchangeCapabilities(BaseModel):
    """What an exchange adapter supports."""

    name: str
    slug: str
    currencies: list[str]
    assets: list[str]
    markets: list[MarketInfo]
    requires: list[str]
    provides_history: str = "date"
    provides_full_history: bool = True
    tid: str = "tid"
    tradable: bool = True
    force_reorder_delay: bool = False

    model_config = ConfigDict(frozen=True)

    def find_market(self, currency: str, asset: str) -> MarketInfo | None:
        """Get the market of a currency/asset pair, if supported."""
        key = (currency.upper(), asset.upper())
        return next((m for m in self.markets if m.pair == key), None)


def _market(currency: str, asset: str, minimal: str) -> MarketInfo:
    return MarketInfo(
        pair=(currency, asset),
        minimal_order=MinimalOrder(amount=Decimal(minimal)),
    )


ABUCOINS_CAPABILITIES = ExchangeCapabilities(
    name="Abucoins",
    slug="abucoins",
    currencies=["PLN", "EUR", "USD", "BTC"],
    assets=[
        "BTC",
        "ETH",
        "LTC",
        "ETC",
        "ZEC",
        "STRAT",
        "DASH",
        "XMR",
        "XEM",
        "GNT",
        "REP",
        "XRP",
        "BCH",
        "SC",
        "BTG",
        "LSK",
        "HSR",
        "QTUM",
        "ADA",
        "TRX",
        "ARK",
        "EOS",
    ],
    markets=[
        _market("BTC", "ETH", "0.001"),
        _market("BTC", "LTC", "0.001"),
        _market("BTC", "ETC", "0.001"),
        _market("BTC", "ZEC", "0.001"),
        _market("BTC", "STRAT", "0.01"),
        _market("BTC", "DASH", "0.001"),
        _market("BTC", "XMR", "0.001"),
        _market("BTC", "SC", "1"),
        _market("BTC", "XEM", "1"),
        _market("BTC", "GNT", "0.01"),
        _market("BTC", "REP", "0.01"),
        _market("BTC", "XRP", "0.01"),
        _market("BTC", "BCH", "0.0001"),
        _market("PLN", "BTC", "0.0001"),
        _market("USD", "BTC", "0.0001"),
        _market("EUR", "BTC", "0.0001"),
        _market("PLN", "ETH", "0.0001"),
        _market("BTC", "BTG", "0.0001"),
        _market("PLN", "BCH", "0.0001"),
        _market("USD", "BCH", "0.0001"),
        _market("EUR", "BCH", "0.0001"),
        _market("USD", "ETH", "0.0001"),
        _market("EUR", "ETH", "0.0001"),
        _market("PLN", "BTG", "0.0001"),
        _market("USD", "BTG", "0.0001"),
        _market("EUR", "BTG", "0.0001"),
        _market("BTC", "LSK", "0.0001"),
        _market("PLN", "LSK", "0.0001"),
        _market("USD", "LSK", "0.0001"),
        _market("EUR", "LSK", "0.0001"),
        _market("BTC", "HSR", "0.0001"),
        _market("BTC", "QTUM", "0.0001"),
        _market("BTC", "ADA", "0.001"),
        _market("BTC", "TRX", "0.01"),
        _market("BTC", "ARK", "0.0001"),
        _market("BTC", "EOS", "0.0001"),
    ],
    requires=["key", "secret", "passphrase"],
)
