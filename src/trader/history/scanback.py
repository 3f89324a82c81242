"""
Trade history reconstruction by scanback.

The exchange only serves trades in newest-first pages behind an `after`
cursor. To recover every trade since an instant the controller:

1. Pages backward from the most recent page until a page reaches past the
   requested instant (the anchor page)
2. Turns around and pages forward from the anchor to the present,
   accumulating trades in chronological order
3. Hands the gap-free list to the caller and returns to IDLE

Pages are fetched one at a time through the retry executor, with a fixed
delay between consecutive requests to respect rate limits.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from src.trader.adapters.abucoins.mapper import to_trade_records
from src.trader.config import ScanSettings
from src.trader.enums import ScanPhase
from src.trader.errors import ScanInProgressError
from src.trader.history.state import ScanState
from src.trader.model.trade import TradeRecord
from src.trader.protocols.exchange import ExchangeAPI, RawPayload
from src.trader.retry.executor import RetryExecutor, Sleep
from src.trader.retry.policy import RetryPolicy

logger = logging.getLogger(__name__)

PageMapper = Callable[[Sequence[RawPayload]], list[TradeRecord]]


class ScanbackController:
    """
    Stateful backward-then-forward pagination over an exchange's trades.

    One scan runs at a time per controller. A scan that fails for any
    reason (fatal error, exhausted retries, malformed data, cancellation)
    resets the controller to IDLE before the error propagates, so the
    controller is always reusable.
    """

    def __init__(
        self,
        api: ExchangeAPI,
        market: str,
        executor: RetryExecutor,
        policy: RetryPolicy,
        settings: ScanSettings | None = None,
        mapper: PageMapper = to_trade_records,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """
        Initialize the controller.

        Args:
            api: Exchange client serving trade pages
            market: Product id, e.g. 'ETH-BTC'
            executor: Retry executor wrapping each page fetch
            policy: Retry policy for page fetches
            settings: Page size, inter-request delay and drift bound
            mapper: Converts a raw page into trade records
            sleep: Coroutine used for the inter-request delay

        """
        self.api = api
        self.market = market
        self.executor = executor
        self.policy = policy
        self.settings = settings or ScanSettings()
        self.mapper = mapper
        self._sleep = sleep
        self.state = ScanState()

    @property
    def phase(self) -> ScanPhase:
        return self.state.phase

    @property
    def scanning(self) -> bool:
        return self.state.active

    def reset(self) -> None:
        """Force the controller back to IDLE."""
        if self.state.active:
            logger.warning(f"Resetting scan in phase {self.state.phase.value}")
        self.state.reset()

    async def get_trades(self, since: datetime | None = None) -> list[TradeRecord]:
        """
        Get trades in chronological order.

        Args:
            since: Instant to reconstruct history from, None for the most
                recent page only

        Returns:
            Trades in ascending chronological order. With `since`, every
            trade from the anchor page up to the present, without gaps.

        Raises:
            ScanInProgressError: If a scan is already running
            FatalError: If a page fetch fails irrecoverably
            ParseError: If a page holds malformed trades

        """
        if self.state.active:
            raise ScanInProgressError(
                f"History scan since {self.state.since} is still running"
            )

        if since is None:
            page = await self._fetch_page()
            return list(reversed(page))

        if since.tzinfo is None:
            since = since.replace(tzinfo=UTC)

        self.state.begin(since)
        try:
            return await self._scan(since)
        finally:
            self.state.reset()

    async def _scan(self, since: datetime) -> list[TradeRecord]:
        logger.debug(f"Scanning back in the history needed since {since.isoformat()}")

        anchor_page = await self._scan_backward(since)
        if not anchor_page:
            logger.info("Scan finished: no trades on the market")
            return self.state.finish()

        oldest, newest = anchor_page[-1], anchor_page[0]
        self.state.anchor_on(oldest.id)
        logger.debug(
            f"Backwards: {oldest.timestamp.isoformat()} ({oldest.id}) to "
            f"{newest.timestamp.isoformat()} ({newest.id})"
        )

        await self._scan_forward(anchor_page)

        result = self.state.finish()
        logger.info(f"Scan finished: data found: {len(result)}")
        return result

    async def _scan_backward(self, since: datetime) -> list[TradeRecord]:
        """
        Page backward until a page reaches past `since`.

        Returns:
            The anchor page (newest first). When history runs out first,
            the oldest page available; empty when the market has no trades.

        """
        page = await self._fetch_page()
        previous: list[TradeRecord] = []
        while page:
            oldest = page[-1]
            if oldest.is_before(since):
                return page

            logger.debug(f"Scanning backwards... {oldest.timestamp.isoformat()}")
            cursor = self.state.next_backward_cursor(
                oldest.id, self.settings.batch_size, self.settings.max_scan_attempts
            )
            previous = page
            await self._sleep(self.settings.query_delay)
            page = await self._fetch_page(after=cursor)

        if previous:
            logger.debug(f"Reached the start of history at trade {previous[-1].id}")
        return previous

    async def _scan_forward(self, page: list[TradeRecord]) -> None:
        """Page forward from the anchor page until no newer trades appear."""
        while True:
            target = self.state.accumulate(page)
            await self._sleep(self.settings.query_delay)
            page = await self._fetch_page(after=target + self.settings.batch_size + 1)
            if not page or page[0].id <= target:
                return
            logger.debug(
                f"Forwards: {page[-1].id} to {page[0].id} "
                f"({page[0].timestamp.isoformat()})"
            )

    async def _fetch_page(self, after: int | None = None) -> list[TradeRecord]:
        """Fetch one newest-first page through the retry executor."""

        async def fetch() -> list[RawPayload]:
            return await self.api.get_product_trades(
                self.market, after=after, limit=self.settings.batch_size
            )

        raw = await self.executor.execute(self.policy, fetch, "getTrades")
        return self.mapper(raw)
