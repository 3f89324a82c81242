"""
Abucoins REST API Pydantic Models.

This module implements Pydantic models that parse Abucoins REST payloads
and expose typed properties. Raw fields store exchange data as-is (with a
_raw suffix); properties convert them to Decimal, int and datetime.
"""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


def to_decimal(value: str | float | int) -> Decimal:
    """Convert string or number to a finite Decimal without float rounding."""
    result = Decimal(str(value))
    if not result.is_finite():
        raise ValueError(f"Non-finite number: {value!r}")
    return result


def to_utc(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp as a UTC instant.

    Naive timestamps are taken as UTC, which is what the exchange sends.
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


class TradeData(BaseModel):
    """Public trade entry from /products/{id}/trades."""

    trade_id_raw: int | str = Field(alias="trade_id")
    price_raw: str | float = Field(alias="price")
    size_raw: str | float = Field(alias="size")
    time: str
    side: str | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @property
    def trade_id(self) -> int:
        """Get trade id as integer."""
        return int(self.trade_id_raw)

    @property
    def price(self) -> Decimal:
        """Get trade price."""
        return to_decimal(self.price_raw)

    @property
    def size(self) -> Decimal:
        """Get trade size."""
        return to_decimal(self.size_raw)

    @property
    def timestamp(self) -> datetime:
        """Get trade timestamp."""
        return to_utc(self.time)


class AccountData(BaseModel):
    """Account balance entry from /accounts."""

    currency: str
    available_raw: str | float = Field(alias="available")
    balance_raw: str | float | None = Field(alias="balance", default=None)

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @property
    def available(self) -> Decimal:
        return to_decimal(self.available_raw)


class TickerData(BaseModel):
    """Ticker from /products/{id}/ticker."""

    bid_raw: str | float = Field(alias="bid")
    ask_raw: str | float = Field(alias="ask")
    price_raw: str | float | None = Field(alias="price", default=None)

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @property
    def bid(self) -> Decimal:
        return to_decimal(self.bid_raw)

    @property
    def ask(self) -> Decimal:
        return to_decimal(self.ask_raw)


class OrderData(BaseModel):
    """Order from /orders and /orders/{id}."""

    id: str
    status: str | None = None
    price_raw: str | float | None = Field(alias="price", default=None)
    filled_size_raw: str | float | None = Field(alias="filled_size", default=None)
    done_at: str | None = None

    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, coerce_numbers_to_str=True
    )

    @property
    def price(self) -> Decimal:
        """Get order price, zero when not reported."""
        if self.price_raw is None:
            return Decimal("0")
        return to_decimal(self.price_raw)

    @property
    def filled_size(self) -> Decimal:
        """Get filled size, zero when nothing was filled."""
        if self.filled_size_raw is None:
            return Decimal("0")
        return to_decimal(self.filled_size_raw)

    @property
    def done_at_datetime(self) -> datetime | None:
        """Get completion time, None while the order is open."""
        return to_utc(self.done_at) if self.done_at else None
