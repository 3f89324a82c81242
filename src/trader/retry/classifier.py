"""
Error classification.

The classifier is the only gate deciding retry versus abort. It is a total
mapping over ErrorKind, so the decision is deterministic for a given error.
"""

import logging

from src.trader.enums import ErrorKind
from src.trader.errors import ExchangeError, FatalError, TransientError

logger = logging.getLogger(__name__)

TRANSIENT_KINDS: frozenset[ErrorKind] = frozenset(
    {
        ErrorKind.TIMEOUT,
        ErrorKind.CONN_RESET,
        ErrorKind.CONN_REFUSED,
        ErrorKind.DNS_FAILURE,
        ErrorKind.RATE_LIMITED,
        ErrorKind.SERVER_ERROR,
    }
)

FATAL_KINDS: frozenset[ErrorKind] = frozenset(ErrorKind) - TRANSIENT_KINDS


def is_transient(kind: ErrorKind) -> bool:
    """Check whether a failure kind is worth retrying."""
    return kind in TRANSIENT_KINDS


def classify(
    error: BaseException | None, operation: str = "request"
) -> TransientError | FatalError | None:
    """
    Classify a raw failure.

    Args:
        error: Failure observed by an operation, or None on success
        operation: Operation name used in log messages

    Returns:
        None when there was no error, TransientError for recoverable
        network/protocol conditions, FatalError for everything else

    """
    if error is None:
        return None

    cause = ExchangeError.from_exception(error)
    if not is_transient(cause.kind):
        logger.error(
            f"({operation}) returned an irrecoverable error: {cause.message}"
        )
        return FatalError(cause)

    logger.debug(f"({operation}) returned an error, retrying: {cause.message}")
    return TransientError(cause)
