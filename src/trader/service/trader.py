"""
Abucoins trader service.

This module provides the uniform trading-bot interface on top of an
ExchangeAPI client. Every network call runs through the retry executor:
state-changing operations with the bounded critical policy, idempotent
reads with the unbounded patient policy.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from decimal import Decimal
from functools import partial
from typing import Any

from src.trader.adapters.abucoins.capabilities import (
    ABUCOINS_CAPABILITIES,
    ExchangeCapabilities,
)
from src.trader.adapters.abucoins.mapper import (
    to_order,
    to_order_fill,
    to_portfolio,
    to_ticker,
)
from src.trader.config import TraderSettings
from src.trader.enums import OrderSide, OrderStatus
from src.trader.errors import FatalError
from src.trader.history.scanback import ScanbackController
from src.trader.model import OrderFill, PortfolioEntry, Ticker, TradeRecord
from src.trader.protocols.exchange import ExchangeAPI
from src.trader.retry.executor import RetryExecutor, Sleep
from src.trader.service.formatting import format_decimals

logger = logging.getLogger(__name__)

FIAT_CURRENCIES = frozenset({"USD", "PLN", "EUR"})
FIAT_TAKER_FEE = Decimal("0.0025")
CRYPTO_TAKER_FEE = Decimal("0.001")


class Trader:
    """
    Trading-bot facade for one Abucoins market.

    Example:
        settings = TraderSettings.from_env()
        async with AbucoinsClient(settings.exchange) as client:
            trader = Trader(settings, client)
            trades = await trader.get_trades(since=datetime(2024, 1, 1, tzinfo=UTC))

    """

    name = "Abucoins"

    def __init__(
        self,
        settings: TraderSettings,
        api: ExchangeAPI,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """
        Initialize the trader.

        Args:
            settings: Trader configuration
            api: Exchange client
            sleep: Coroutine used for backoff and scan delays

        """
        self.settings = settings
        self.api = api
        self.asset = settings.exchange.asset.upper()
        self.currency = settings.exchange.currency.upper()
        self.pair = settings.exchange.pair
        self.post_only = settings.exchange.post_only

        self.executor = RetryExecutor(sleep=sleep)
        self.critical = settings.retry.critical_policy()
        self.patient = settings.retry.patient_policy()

        self.history = ScanbackController(
            api=api,
            market=self.pair,
            executor=self.executor,
            policy=self.patient,
            settings=settings.scan,
            sleep=sleep,
        )

    @staticmethod
    def get_capabilities() -> ExchangeCapabilities:
        """Get static exchange capability metadata."""
        return ABUCOINS_CAPABILITIES

    async def _critical(
        self, name: str, call: Callable[..., Awaitable[Any]], *args: Any
    ) -> Any:
        return await self.executor.execute(self.critical, partial(call, *args), name)

    async def _patient(
        self, name: str, call: Callable[..., Awaitable[Any]], *args: Any
    ) -> Any:
        return await self.executor.execute(self.patient, partial(call, *args), name)

    # Account and market data

    async def get_portfolio(self) -> list[PortfolioEntry]:
        """Get available balances per currency."""
        accounts = await self._patient("getPortfolio", self.api.get_accounts)
        return to_portfolio(accounts)

    async def get_ticker(self) -> Ticker:
        """Get best bid and ask of the traded market."""
        data = await self._patient(
            "getTicker", self.api.get_product_ticker, self.pair
        )
        return to_ticker(data)

    async def get_fee(self) -> Decimal:
        """
        Get the fee rate applied to our orders.

        Maker orders are free, so post-only trading pays nothing. Otherwise
        the taker fee depends on whether the quote currency is fiat.
        """
        if self.post_only:
            return Decimal("0")
        if self.currency in FIAT_CURRENCIES:
            return FIAT_TAKER_FEE
        return CRYPTO_TAKER_FEE

    async def get_trades(self, since: datetime | None = None) -> list[TradeRecord]:
        """
        Get market trades in chronological order.

        Without `since` only the most recent page is returned. With it, the
        full history since that instant is reconstructed by scanback.
        """
        return await self.history.get_trades(since)

    # Orders

    def _order_params(
        self, amount: Decimal | float, price: Decimal | float
    ) -> dict[str, Any]:
        price_decimals = 5 if self.currency == "BTC" else 2
        return {
            "price": format_decimals(price, price_decimals),
            "size": format_decimals(amount),
            "product_id": self.pair,
            "post_only": self.post_only,
        }

    async def _place_order(
        self, side: OrderSide, amount: Decimal | float, price: Decimal | float
    ) -> str:
        params = self._order_params(amount, price)
        logger.info(
            f"Placing {side.value} order: {params['size']} {self.asset} "
            f"@ {params['price']} {self.currency}"
        )
        data = await self._critical(side.value, self.api.place_order, side, params)
        return to_order(data).id

    async def buy(self, amount: Decimal | float, price: Decimal | float) -> str:
        """Place a limit buy order and return its id."""
        return await self._place_order(OrderSide.BUY, amount, price)

    async def sell(self, amount: Decimal | float, price: Decimal | float) -> str:
        """Place a limit sell order and return its id."""
        return await self._place_order(OrderSide.SELL, amount, price)

    async def check_order(self, order_id: str) -> bool:
        """Check whether an order is completely filled."""
        data = await self._critical("checkOrder", self.api.get_order, order_id)
        return OrderStatus.from_exchange(to_order(data).status) == OrderStatus.DONE

    async def get_order(self, order_id: str) -> OrderFill:
        """Get price, filled amount and completion time of an order."""
        data = await self._patient("getOrder", self.api.get_order, order_id)
        return to_order_fill(data)

    async def cancel_order(self, order_id: str) -> bool:
        """
        Cancel an order.

        Returns:
            False when the order was cancelled, True when the exchange
            refused, which means the order was already filled

        Raises:
            TransientError: When the exchange stayed unreachable for the
                whole critical policy

        """
        try:
            await self._critical("cancelOrder", self.api.cancel_order, order_id)
        except FatalError as e:
            logger.error(f"Error cancelling order {order_id}: {e}")
            return True
        return False
