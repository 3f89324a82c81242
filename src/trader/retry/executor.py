"""
Retry executor with exponential backoff.

This module runs a single asynchronous operation under a retry policy:
- Success returns the payload and ends the sequence
- Transient failures are retried after a backoff delay
- Fatal failures abort immediately
- Bounded policies give up after max_attempts and surface the last error
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from src.trader.enums import ErrorKind
from src.trader.errors import ExchangeError, FatalError, TransientError
from src.trader.retry.classifier import classify
from src.trader.retry.policy import RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class RetryExecutor:
    """
    Runs operations under a retry policy.

    The executor is single-flight per call: the next attempt only starts
    after the previous one completed or timed out. It keeps no state
    between calls, so independent calls may run concurrently.
    """

    def __init__(self, sleep: Sleep = asyncio.sleep) -> None:
        """
        Initialize the executor.

        Args:
            sleep: Coroutine used to wait between attempts

        """
        self._sleep = sleep

    async def execute(
        self,
        policy: RetryPolicy,
        operation: Callable[[], Awaitable[T]],
        name: str = "operation",
    ) -> T:
        """
        Execute an operation until it succeeds or the policy gives up.

        Args:
            policy: Retry policy to apply
            operation: Zero-argument coroutine function performing one attempt
            name: Operation name used in log messages

        Returns:
            Payload of the first successful attempt

        Raises:
            FatalError: On the first irrecoverable failure
            TransientError: When a bounded policy runs out of attempts
            ParseError: Propagated as is, never retried

        """
        attempt = 0
        while True:
            attempt += 1
            try:
                result = await self._attempt(policy, operation)
            except ExchangeError as e:
                classified = classify(e, name)
            else:
                logger.debug(f"({name}) attempt {attempt} succeeded")
                return result

            if isinstance(classified, FatalError):
                raise classified from classified.cause
            if not isinstance(classified, TransientError):
                raise RuntimeError(
                    f"({name}) attempt {attempt} failed without an error"
                )

            if not policy.allows_attempt(attempt + 1):
                logger.error(
                    f"({name}) giving up after {attempt} attempts: "
                    f"{classified.cause.message}"
                )
                raise classified from classified.cause

            delay = policy.delay_for(attempt - 1)
            logger.debug(
                f"({name}) attempt {attempt} failed "
                f"[{classified.kind.value}], retrying in {delay:.2f}s"
            )
            await self._sleep(delay)

    async def _attempt(
        self, policy: RetryPolicy, operation: Callable[[], Awaitable[T]]
    ) -> T:
        """Run one attempt, turning a policy timeout into a TIMEOUT error."""
        if policy.attempt_timeout is None:
            return await operation()
        try:
            return await asyncio.wait_for(operation(), timeout=policy.attempt_timeout)
        except TimeoutError as e:
            raise ExchangeError(
                f"ETIMEDOUT after {policy.attempt_timeout}s", ErrorKind.TIMEOUT
            ) from e
