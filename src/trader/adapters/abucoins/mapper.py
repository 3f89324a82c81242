"""
Abucoins payload to domain model mapping.

Every function here is pure. Malformed numeric or timestamp input raises
ParseError, which the retry executor never retries.
"""

from collections.abc import Mapping, Sequence
from decimal import InvalidOperation
from typing import Any

from pydantic import ValidationError

from src.trader.adapters.abucoins.data import (
    AccountData,
    OrderData,
    TickerData,
    TradeData,
)
from src.trader.errors import ParseError
from src.trader.model import OrderFill, PortfolioEntry, Ticker, TradeRecord

_PARSE_FAILURES = (ValidationError, ValueError, InvalidOperation, TypeError)


def to_trade_record(raw: Mapping[str, Any] | TradeData) -> TradeRecord:
    """
    Convert a raw trade entry into a TradeRecord.

    Args:
        raw: Trade payload with `trade_id`, `size`, `price` and `time`

    Returns:
        Normalized trade record with Decimal amounts and a UTC timestamp

    Raises:
        ParseError: If any field is missing or malformed

    """
    try:
        trade = raw if isinstance(raw, TradeData) else TradeData.model_validate(raw)
        return TradeRecord(
            id=trade.trade_id,
            price=trade.price,
            amount=trade.size,
            timestamp=trade.timestamp,
        )
    except _PARSE_FAILURES as e:
        raise ParseError(f"Malformed trade {raw!r}: {e}") from e


def to_trade_records(page: Sequence[Mapping[str, Any]]) -> list[TradeRecord]:
    """Convert a page of raw trades, keeping the exchange order."""
    if not isinstance(page, list):
        raise ParseError(f"Malformed trades page, expected a list: {page!r}")
    return [to_trade_record(raw) for raw in page]


def to_portfolio(accounts: Sequence[Mapping[str, Any]]) -> list[PortfolioEntry]:
    """Convert /accounts entries into portfolio balances."""
    if not isinstance(accounts, list):
        raise ParseError(
            f"Malformed accounts payload, expected a list: {accounts!r}"
        )
    try:
        return [
            PortfolioEntry(name=account.currency.upper(), amount=account.available)
            for account in (AccountData.model_validate(raw) for raw in accounts)
        ]
    except _PARSE_FAILURES as e:
        raise ParseError(f"Malformed accounts payload: {e}") from e


def to_ticker(raw: Mapping[str, Any]) -> Ticker:
    """Convert a ticker payload."""
    try:
        data = TickerData.model_validate(raw)
        return Ticker(bid=data.bid, ask=data.ask)
    except _PARSE_FAILURES as e:
        raise ParseError(f"Malformed ticker {raw!r}: {e}") from e


def to_order(raw: Mapping[str, Any]) -> OrderData:
    """Validate an order payload."""
    try:
        return OrderData.model_validate(raw)
    except _PARSE_FAILURES as e:
        raise ParseError(f"Malformed order {raw!r}: {e}") from e


def to_order_fill(raw: Mapping[str, Any]) -> OrderFill:
    """Convert an order payload into its execution summary."""
    order = to_order(raw)
    try:
        return OrderFill(
            price=order.price,
            amount=order.filled_size,
            date=order.done_at_datetime,
        )
    except _PARSE_FAILURES as e:
        raise ParseError(f"Malformed order {raw!r}: {e}") from e
