"""Test the Trader facade against an in-memory exchange."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from src.trader.enums import OrderSide
from src.trader.errors import FatalError, TransientError
from src.trader.service.trader import Trader
from tests.unit.app.trader.helpers import (
    FakeExchangeAPI,
    RecordingSleep,
    fatal,
    make_settings,
    trade_time,
    transient,
)


@pytest.fixture
def api() -> FakeExchangeAPI:
    return FakeExchangeAPI()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def trader(api: FakeExchangeAPI, sleep: RecordingSleep) -> Trader:
    return Trader(make_settings(), api, sleep=sleep)


class TestMarketData:
    """Test portfolio, ticker, fee and trades."""

    @pytest.mark.asyncio
    async def test_get_portfolio(self, trader: Trader) -> None:
        portfolio = await trader.get_portfolio()

        assert [(p.name, p.amount) for p in portfolio] == [
            ("BTC", Decimal("0.5")),
            ("PLN", Decimal("1000.10")),
        ]

    @pytest.mark.asyncio
    async def test_get_portfolio_retries_transient_errors(
        self, trader: Trader, api: FakeExchangeAPI, sleep: RecordingSleep
    ) -> None:
        """Test that reads use the patient policy."""
        api.failures = [transient() for _ in range(6)]

        portfolio = await trader.get_portfolio()

        assert len(portfolio) == 2
        assert sleep.delays == pytest.approx([1, 1.2, 1.44, 1.728, 2.0736, 2.48832])

    @pytest.mark.asyncio
    async def test_get_portfolio_fatal_error(
        self, trader: Trader, api: FakeExchangeAPI
    ) -> None:
        api.failures = [fatal("Invalid API key")]

        with pytest.raises(FatalError, match="Invalid API key"):
            await trader.get_portfolio()

    @pytest.mark.asyncio
    async def test_get_ticker(self, trader: Trader) -> None:
        ticker = await trader.get_ticker()

        assert ticker.bid == Decimal("40000.1")
        assert ticker.ask == Decimal("40010.9")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "currency,post_only,expected",
        [
            ("BTC", True, Decimal("0")),
            ("PLN", True, Decimal("0")),
            ("PLN", False, Decimal("0.0025")),
            ("USD", False, Decimal("0.0025")),
            ("EUR", False, Decimal("0.0025")),
            ("BTC", False, Decimal("0.001")),
        ],
    )
    async def test_get_fee(
        self, api: FakeExchangeAPI, currency: str, post_only: bool, expected: Decimal
    ) -> None:
        trader = Trader(make_settings(currency=currency, post_only=post_only), api)

        assert await trader.get_fee() == expected

    @pytest.mark.asyncio
    async def test_get_trades_recent(self, trader: Trader) -> None:
        trades = await trader.get_trades()

        assert [t.id for t in trades] == list(range(401, 501))

    @pytest.mark.asyncio
    async def test_get_trades_since(self, trader: Trader) -> None:
        trades = await trader.get_trades(since=trade_time(250))

        assert trades[0].id == 201
        assert trades[-1].id == 500

    @pytest.mark.asyncio
    async def test_get_trades_accepts_naive_since(self, trader: Trader) -> None:
        """Test that a naive instant is taken as UTC."""
        naive = trade_time(250).replace(tzinfo=None)

        trades = await trader.get_trades(since=naive)

        assert len(trades) == 300

    def test_capabilities(self) -> None:
        capabilities = Trader.get_capabilities()

        assert capabilities.slug == "abucoins"
        assert capabilities.requires == ["key", "secret", "passphrase"]
        market = capabilities.find_market("btc", "eth")
        assert market is not None
        assert market.minimal_order.amount == Decimal("0.001")
        assert capabilities.find_market("USD", "DOGE") is None


class TestOrders:
    """Test order placement, status and cancellation."""

    @pytest.mark.asyncio
    async def test_buy_formats_params(
        self, trader: Trader, api: FakeExchangeAPI
    ) -> None:
        """Test that BTC-quoted prices keep five decimals."""
        order_id = await trader.buy(Decimal("0.123456789"), Decimal("0.0512345678"))

        assert order_id == "order-1"
        side, params = api.placed[0]
        assert side == OrderSide.BUY
        assert params == {
            "price": "0.05123",
            "size": "0.12345678",
            "product_id": "ETH-BTC",
            "post_only": True,
        }

    @pytest.mark.asyncio
    async def test_sell_with_fiat_currency(self, api: FakeExchangeAPI) -> None:
        """Test that fiat-quoted prices keep two decimals."""
        trader = Trader(
            make_settings(currency="PLN", asset="BTC", post_only=False), api
        )

        await trader.sell(0.5, 40000.129)

        side, params = api.placed[0]
        assert side == OrderSide.SELL
        assert params["price"] == "40000.12"
        assert params["size"] == "0.5"
        assert params["product_id"] == "BTC-PLN"
        assert params["post_only"] is False

    @pytest.mark.asyncio
    async def test_buy_gives_up_after_critical_budget(
        self, trader: Trader, api: FakeExchangeAPI, sleep: RecordingSleep
    ) -> None:
        """Test that state-changing calls use the bounded policy."""
        api.failures = [transient() for _ in range(5)]

        with pytest.raises(TransientError):
            await trader.buy(1, 1)

        assert api.placed == []
        assert sleep.delays == pytest.approx([1, 1.2])

    @pytest.mark.asyncio
    async def test_check_order(self, trader: Trader, api: FakeExchangeAPI) -> None:
        order_id = await trader.buy(1, 1)
        assert await trader.check_order(order_id) is False

        api.orders[order_id]["status"] = "rejected"
        assert await trader.check_order(order_id) is False

        api.orders[order_id]["status"] = "done"
        assert await trader.check_order(order_id) is True

    @pytest.mark.asyncio
    async def test_get_order(self, trader: Trader, api: FakeExchangeAPI) -> None:
        order_id = await trader.sell(2, "0.05")
        api.orders[order_id].update(
            {"status": "done", "filled_size": "2", "done_at": "2024-01-02T00:00:00Z"}
        )

        fill = await trader.get_order(order_id)

        assert fill.price == Decimal("0.05")
        assert fill.amount == Decimal("2")
        assert fill.date == datetime(2024, 1, 2, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_cancel_order_success(self, trader: Trader) -> None:
        assert await trader.cancel_order("order-1") is False

    @pytest.mark.asyncio
    async def test_cancel_refused_means_filled(
        self, trader: Trader, api: FakeExchangeAPI
    ) -> None:
        """Test that a refused cancel reports the order as filled."""
        api.cancel_error = fatal("Order already done")

        assert await trader.cancel_order("order-1") is True

    @pytest.mark.asyncio
    async def test_cancel_exhausted_raises(
        self, trader: Trader, api: FakeExchangeAPI, sleep: RecordingSleep
    ) -> None:
        """Test that running out of retries is not taken as a fill."""
        api.cancel_error = transient("ECONNRESET")

        with pytest.raises(TransientError, match="ECONNRESET"):
            await trader.cancel_order("order-1")

        assert len(sleep.delays) == 2
