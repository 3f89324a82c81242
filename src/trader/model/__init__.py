"""Trader domain models."""

from src.trader.model.account import PortfolioEntry
from src.trader.model.order import OrderFill
from src.trader.model.ticker import Ticker
from src.trader.model.trade import TradeRecord

__all__ = [
    "OrderFill",
    "PortfolioEntry",
    "Ticker",
    "TradeRecord",
]
