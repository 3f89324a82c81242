#!/usr/bin/env python3
"""Print the Abucoins market state and the trades of the last hour."""

import asyncio
from datetime import UTC, datetime, timedelta

from dotenv import load_dotenv

from src.trader.adapters.abucoins.client import AbucoinsClient
from src.trader.config import TraderSettings
from src.trader.log import configure_logging
from src.trader.service.trader import Trader


async def main() -> None:
    """Connect with settings from the environment and print a summary."""
    settings = TraderSettings.from_env()
    configure_logging(settings)

    async with AbucoinsClient(settings.exchange) as client:
        trader = Trader(settings, client)
        ticker = await trader.get_ticker()
        print(f"{trader.pair}: bid {ticker.bid} ask {ticker.ask} spread {ticker.spread}")

        since = datetime.now(UTC) - timedelta(hours=1)
        trades = await trader.get_trades(since=since)
        print(f"{len(trades)} trades since {since.isoformat()}")
        for trade in trades[-10:]:
            print(f"  {trade.timestamp.isoformat()} #{trade.id} {trade.amount} @ {trade.price}")


if __name__ == "__main__":
    load_dotenv()
    print("Starting Abucoins trader...")
    print("-" * 50)
    asyncio.run(main())
