"""Test helpers for trader tests."""

from datetime import UTC, datetime, timedelta
from typing import Any

from src.trader.config import (
    ExchangeSettings,
    RetrySettings,
    ScanSettings,
    TraderSettings,
)
from src.trader.enums import ErrorKind, OrderSide
from src.trader.errors import ExchangeError

EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


def trade_time(trade_id: int) -> datetime:
    """Trades are one minute apart, ordered by id."""
    return EPOCH + timedelta(minutes=trade_id)


class TradeBuilder:
    """Builder for creating raw Abucoins trade payloads."""

    def __init__(self) -> None:
        """Initialize with sensible defaults."""
        self._data: dict[str, Any] = {
            "trade_id": 1,
            "price": "100.25",
            "size": "1.5",
            "side": "buy",
            "time": "2024-01-01T00:00:00Z",
        }

    def with_id(self, trade_id: int) -> "TradeBuilder":
        """Set the trade id and a matching timestamp."""
        self._data["trade_id"] = trade_id
        self._data["time"] = trade_time(trade_id).isoformat().replace("+00:00", "Z")
        return self

    def with_price(self, price: str | float) -> "TradeBuilder":
        self._data["price"] = str(price)
        return self

    def with_size(self, size: str | float) -> "TradeBuilder":
        self._data["size"] = str(size)
        return self

    def with_time(self, time: str) -> "TradeBuilder":
        self._data["time"] = time
        return self

    def build_json(self) -> dict[str, Any]:
        """Build as raw JSON data."""
        return dict(self._data)


class RecordingSleep:
    """Sleep replacement that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FlakyOperation:
    """
    Operation failing with the given errors before succeeding.

    Once the errors are used up every call returns `result`.
    """

    def __init__(self, errors: list[ExchangeError], result: Any = "ok") -> None:
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


def transient(message: str = "ETIMEDOUT") -> ExchangeError:
    return ExchangeError(message, ErrorKind.TIMEOUT)


def fatal(message: str = "Invalid API key") -> ExchangeError:
    return ExchangeError(message, ErrorKind.API_MESSAGE, status=401)


class FakeExchangeAPI:
    """
    In-memory ExchangeAPI serving trade pages with cursor semantics.

    `get_product_trades(after=N)` returns up to `limit` trades with ids
    strictly below N, newest first, like the real exchange.
    """

    def __init__(self, trade_ids: range | list[int] | None = None) -> None:
        ids = trade_ids if trade_ids is not None else range(201, 501)
        self.trades = [TradeBuilder().with_id(i).build_json() for i in ids]
        self.trade_calls: list[int | None] = []
        self.trade_failures: dict[int, list[ExchangeError]] = {}

        self.accounts: list[dict[str, Any]] = [
            {"currency": "btc", "available": "0.5", "balance": "0.5"},
            {"currency": "pln", "available": "1000.10", "balance": "1200"},
        ]
        self.ticker: dict[str, Any] = {"bid": "40000.1", "ask": "40010.9"}
        self.orders: dict[str, dict[str, Any]] = {}
        self.placed: list[tuple[OrderSide, dict[str, Any]]] = []
        self.cancel_error: ExchangeError | None = None
        self.failures: list[ExchangeError] = []

    def fail_page(self, call_index: int, *errors: ExchangeError) -> None:
        """Make the n-th trade page call (0-based) fail with errors first."""
        self.trade_failures[call_index] = list(errors)

    def _maybe_fail(self) -> None:
        if self.failures:
            raise self.failures.pop(0)

    async def get_accounts(self) -> list[dict[str, Any]]:
        self._maybe_fail()
        return self.accounts

    async def get_product_ticker(self, market: str) -> dict[str, Any]:
        self._maybe_fail()
        return self.ticker

    async def get_product_trades(
        self, market: str, after: int | None = None, limit: int = 100
    ) -> list[dict[str, Any]]:
        index = len(self.trade_calls)
        pending = self.trade_failures.get(index)
        if pending:
            raise pending.pop(0)
        self.trade_calls.append(after)

        newest_first = sorted(self.trades, key=lambda t: t["trade_id"], reverse=True)
        if after is not None:
            newest_first = [t for t in newest_first if t["trade_id"] < after]
        return newest_first[:limit]

    async def place_order(
        self, side: OrderSide, params: dict[str, Any]
    ) -> dict[str, Any]:
        self._maybe_fail()
        self.placed.append((side, params))
        order_id = f"order-{len(self.placed)}"
        self.orders[order_id] = {
            "id": order_id,
            "status": "pending",
            "price": params["price"],
            "filled_size": "0",
            "done_at": None,
        }
        return self.orders[order_id]

    async def get_order(self, order_id: str) -> dict[str, Any]:
        self._maybe_fail()
        return self.orders[order_id]

    async def cancel_order(self, order_id: str) -> Any:
        if self.cancel_error is not None:
            raise self.cancel_error
        return [order_id]


def make_settings(
    currency: str = "BTC",
    asset: str = "ETH",
    post_only: bool = True,
    max_attempts: int = 3,
) -> TraderSettings:
    """Build settings without reading the environment."""
    return TraderSettings(
        exchange=ExchangeSettings(
            asset=asset, currency=currency, post_only=post_only
        ),
        retry=RetrySettings(
            critical_max_attempts=max_attempts,
            critical_min_delay=1.0,
            critical_max_delay=5.0,
            patient_min_delay=1.0,
            patient_max_delay=5.0,
        ),
        scan=ScanSettings(batch_size=100, query_delay=0.3),
    )
