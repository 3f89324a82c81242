"""Order domain models."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class OrderFill(BaseModel):
    """
    Execution summary of an order.

    The price is the order's limit price and amount is the filled size, as
    reported by the exchange.
    """

    price: Decimal = Field(description="Order price")
    amount: Decimal = Field(description="Filled size")
    date: datetime | None = Field(
        default=None, description="Completion time, None while the order is open"
    )

    model_config = ConfigDict(frozen=True)
