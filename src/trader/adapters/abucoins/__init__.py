"""Abucoins exchange adapter."""

from src.trader.adapters.abucoins.capabilities import ABUCOINS_CAPABILITIES
from src.trader.adapters.abucoins.client import AbucoinsClient
from src.trader.adapters.abucoins.mapper import to_trade_record, to_trade_records
from src.trader.adapters.abucoins.response import normalize_response

__all__ = [
    "ABUCOINS_CAPABILITIES",
    "AbucoinsClient",
    "normalize_response",
    "to_trade_record",
    "to_trade_records",
]
