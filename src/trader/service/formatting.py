"""Order parameter formatting."""

from decimal import ROUND_FLOOR, Decimal


def format_decimals(number: Decimal | float | str, decimal_limit: int = 8) -> str:
    """
    Format a number with at most `decimal_limit` decimals.

    Numbers already within the limit keep their own representation
    (without trailing zeros); longer ones are truncated toward negative
    infinity, never rounded up.

    Examples:
        format_decimals("0.123456789") -> "0.12345678"
        format_decimals(1.5, 2) -> "1.5"

    """
    value = Decimal(str(number))
    normalized = value.normalize()
    exponent = normalized.as_tuple().exponent
    decimals = -exponent if isinstance(exponent, int) and exponent < 0 else 0
    if decimals <= decimal_limit:
        return format(normalized, "f")
    quantum = Decimal(1).scaleb(-decimal_limit)
    return format(value.quantize(quantum, rounding=ROUND_FLOOR), "f")
