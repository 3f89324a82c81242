"""
Response normalization.

Turns the three things an HTTP call can produce (a transport error, a
status code and a decoded body) into a single effective error or None.
"""

from typing import Any

from src.trader.enums import ErrorKind
from src.trader.errors import ExchangeError


def is_success(status: int | None) -> bool:
    """Check whether a status code is in the 2xx range."""
    return status is not None and 200 <= status <= 299


def body_message(body: Any) -> str | None:
    """Get the in-band error message of a body, if it carries one."""
    if isinstance(body, dict):
        message = body.get("message")
        if message:
            return str(message)
    return None


def normalize_response(
    transport_error: ExchangeError | None,
    status: int | None,
    body: Any,
) -> ExchangeError | None:
    """
    Produce the effective error of an HTTP exchange.

    Precedence:
    1. A non-empty `message` field in the body
    2. A status code outside the 2xx range
    3. The transport error, as is

    Args:
        transport_error: Error raised while sending or receiving, if any
        status: HTTP status code, None when no response arrived
        body: Decoded JSON body, None when absent

    Returns:
        The effective error, or None when the call succeeded

    """
    message = body_message(body)
    if message is not None:
        if status is not None and not is_success(status):
            kind = ErrorKind.from_status(status)
        else:
            kind = ErrorKind.from_message(message)
            if kind == ErrorKind.OTHER:
                kind = ErrorKind.API_MESSAGE
        return ExchangeError(message, kind=kind, status=status)

    if status is not None and not is_success(status):
        return ExchangeError(
            f"Response code {status}",
            kind=ErrorKind.from_status(status),
            status=status,
        )

    return transport_error
