"""
Trade record domain model.

This model represents one executed market trade, independent of the
exchange payload it was parsed from.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TradeRecord(BaseModel):
    """
    Normalized trade record.

    Ids are exchange-assigned and monotonic within a market. The model is
    frozen for immutability.
    """

    id: int = Field(description="Exchange trade id")
    price: Decimal = Field(description="Executed trade price")
    amount: Decimal = Field(description="Trade size in base currency")
    timestamp: datetime = Field(description="Execution time (UTC)")

    model_config = ConfigDict(frozen=True)

    def is_before(self, instant: datetime) -> bool:
        """Check if the trade executed strictly before an instant."""
        return self.timestamp < instant
