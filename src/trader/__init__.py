"""Abucoins trader adapter package."""

from src.trader.model import TradeRecord
from src.trader.service import Trader

__all__ = ["TradeRecord", "Trader"]
