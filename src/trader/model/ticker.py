"""Ticker domain model."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Ticker(BaseModel):
    """Best bid and ask of the traded market."""

    bid: Decimal = Field(description="Best bid price")
    ask: Decimal = Field(description="Best ask price")

    model_config = ConfigDict(frozen=True)

    @property
    def spread(self) -> Decimal:
        return self.ask - self.bid

    @property
    def mid_price(self) -> Decimal:
        return (self.bid + self.ask) / 2
