"""Trader service layer."""

from src.trader.service.formatting import format_decimals
from src.trader.service.trader import Trader

__all__ = ["Trader", "format_decimals"]
