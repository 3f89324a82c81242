"""Tests for order parameter formatting."""

from decimal import Decimal

import pytest

from src.trader.service.formatting import format_decimals


@pytest.mark.parametrize(
    "number,limit,expected",
    [
        ("0.123456789", 8, "0.12345678"),
        ("0.12345678", 8, "0.12345678"),
        (1.5, 2, "1.5"),
        (Decimal("40000.129"), 2, "40000.12"),
        ("0.000123456", 5, "0.00012"),
        ("100", 2, "100"),
        ("1.50", 8, "1.5"),
        ("2.999999999", 8, "2.99999999"),
    ],
)
def test_format_decimals(
    number: Decimal | float | str, limit: int, expected: str
) -> None:
    """Test truncation to a decimal limit."""
    assert format_decimals(number, limit) == expected


def test_never_rounds_up() -> None:
    assert format_decimals("0.999", 2) == "0.99"
