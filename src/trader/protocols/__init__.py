"""Trader protocols."""

from src.trader.protocols.exchange import ExchangeAPI, RawPayload

__all__ = [
    "ExchangeAPI",
    "RawPayload",
]
