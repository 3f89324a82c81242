"""
Abucoins REST API client.

This module implements the ExchangeAPI protocol over aiohttp. It does not
retry: every failure is converted to an ExchangeError with a structured
kind and left to the trader's retry executor.
"""

import asyncio
import json
import logging
import socket
from typing import Any
from urllib.parse import urlencode

import aiohttp

from src.trader.adapters.abucoins.response import normalize_response
from src.trader.adapters.abucoins.signer import AbucoinsSigner
from src.trader.config import ExchangeSettings
from src.trader.enums import ErrorKind, OrderSide
from src.trader.errors import ExchangeError, ParseError
from src.trader.protocols.exchange import RawPayload

logger = logging.getLogger(__name__)


def transport_error(exc: BaseException) -> ExchangeError:
    """
    Convert an aiohttp/asyncio exception into an ExchangeError.

    The kind is decided from the exception type, falling back to the
    message signatures for anything unrecognised.
    """
    message = str(exc) or type(exc).__name__
    if isinstance(exc, asyncio.TimeoutError | aiohttp.ServerTimeoutError):
        return ExchangeError(f"ETIMEDOUT: {message}", ErrorKind.TIMEOUT)
    if isinstance(exc, aiohttp.ClientConnectorError):
        if isinstance(exc.os_error, socket.gaierror):
            return ExchangeError(f"ENOTFOUND: {message}", ErrorKind.DNS_FAILURE)
        return ExchangeError(f"ECONNREFUSED: {message}", ErrorKind.CONN_REFUSED)
    if isinstance(
        exc,
        aiohttp.ServerDisconnectedError
        | aiohttp.ClientOSError
        | aiohttp.ClientPayloadError
        | ConnectionResetError,
    ):
        return ExchangeError(f"ECONNRESET: {message}", ErrorKind.CONN_RESET)
    return ExchangeError.from_exception(exc)


class AbucoinsClient:
    """
    Abucoins REST API client.

    Use as an async context manager, or pass an existing session:

        async with AbucoinsClient(settings) as client:
            trades = await client.get_product_trades("ETH-BTC")
    """

    def __init__(
        self,
        settings: ExchangeSettings,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.settings = settings
        self.signer = AbucoinsSigner(
            settings.key, settings.secret, settings.passphrase
        )
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "AbucoinsClient":
        """Async context manager entry."""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.request_timeout),
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
        private: bool = False,
    ) -> Any:
        """
        Send one request and return its decoded body.

        Raises:
            ExchangeError: Effective error of the exchange, see
                normalize_response
            ParseError: When a successful response is not JSON

        """
        if self.session is None:
            raise RuntimeError("Client not initialized. Use async context manager.")

        query = {k: v for k, v in (params or {}).items() if v is not None}
        path = f"{endpoint}?{urlencode(query)}" if query else endpoint
        body = json.dumps(payload) if payload is not None else ""

        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if private:
            if not self.signer.has_credentials:
                raise ExchangeError(
                    f"Missing API credentials for {method} {endpoint}",
                    ErrorKind.CLIENT_ERROR,
                )
            headers.update(self.signer.headers(method, path, body))

        logger.debug(f"{method} {path}")

        status: int | None = None
        decoded: Any = None
        failure: ExchangeError | None = None
        text = ""
        try:
            async with self.session.request(
                method,
                f"{self.settings.api_url}{path}",
                data=body or None,
                headers=headers,
            ) as response:
                status = response.status
                text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            failure = transport_error(e)

        if text:
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError as e:
                if status is not None and 200 <= status <= 299:
                    raise ParseError(f"Invalid JSON from {path}: {text[:200]}") from e

        error = normalize_response(failure, status, decoded)
        if error is not None:
            raise error
        return decoded

    async def get_accounts(self) -> list[RawPayload]:
        return await self._request("GET", "/accounts", private=True)

    async def get_product_ticker(self, market: str) -> RawPayload:
        return await self._request("GET", f"/products/{market}/ticker")

    async def get_product_trades(
        self, market: str, after: int | None = None, limit: int = 100
    ) -> list[RawPayload]:
        return await self._request(
            "GET",
            f"/products/{market}/trades",
            params={"after": after, "limit": limit},
        )

    async def place_order(self, side: OrderSide, params: RawPayload) -> RawPayload:
        payload = {"side": side.value, "type": "limit", **params}
        return await self._request("POST", "/orders", payload=payload, private=True)

    async def get_order(self, order_id: str) -> RawPayload:
        return await self._request("GET", f"/orders/{order_id}", private=True)

    async def cancel_order(self, order_id: str) -> Any:
        return await self._request("DELETE", f"/orders/{order_id}", private=True)
