"""Portfolio domain model."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PortfolioEntry(BaseModel):
    """Available balance of one currency."""

    name: str = Field(description="Upper-case currency code")
    amount: Decimal = Field(description="Available balance")

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
