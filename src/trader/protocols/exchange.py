"""
Exchange API protocol.

This module defines the contract the trader expects from an exchange
client. Clients return raw JSON payloads; every method is a coroutine that
raises ExchangeError on transport, HTTP-level or in-band failures.

Key design principles:
- Raw payloads: mapping into domain models happens in the trader
- Structured failures: errors carry an ErrorKind set where first observed
- No retries: the trader wraps every call in its retry executor
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from src.trader.enums import OrderSide

RawPayload = dict[str, Any]


@runtime_checkable
class ExchangeAPI(Protocol):
    """
    Protocol for an exchange REST client.

    Semantic Role: Network boundary of the trader
    Relationships:
    - Consumed by: Trader, ScanbackController
    - Failure contract: raises ExchangeError only
    """

    async def get_accounts(self) -> list[RawPayload]:
        """
        Get account balances.

        Returns:
            One entry per currency with `currency` and `available`

        """
        ...

    async def get_product_ticker(self, market: str) -> RawPayload:
        """
        Get the ticker of a market.

        Returns:
            Payload with `bid` and `ask`

        """
        ...

    async def get_product_trades(
        self, market: str, after: int | None = None, limit: int = 100
    ) -> list[RawPayload]:
        """
        Get one page of public trades.

        Semantic Role: Cursor-based pagination
        Relationships:
        - Ordering: newest first
        - Cursor: `after` returns trades with ids strictly below it

        Args:
            market: Product id, e.g. 'ETH-BTC'
            after: Exclusive upper trade id bound, None for the latest page
            limit: Maximum page size

        Returns:
            Raw trades with `trade_id`, `price`, `size`, `time`

        """
        ...

    async def place_order(self, side: OrderSide, params: RawPayload) -> RawPayload:
        """
        Place a limit order.

        Args:
            side: Buy or sell
            params: `price`, `size`, `product_id`, `post_only`

        Returns:
            Payload with the new order `id`

        """
        ...

    async def get_order(self, order_id: str) -> RawPayload:
        """
        Get an order.

        Returns:
            Payload with `status`, `price`, `filled_size`, `done_at`

        """
        ...

    async def cancel_order(self, order_id: str) -> Any:
        """
        Cancel an order.

        Raises:
            ExchangeError: When the order cannot be cancelled, usually
                because it was already filled

        """
        ...
