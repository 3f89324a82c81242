"""
Enums for the trader adapter.

This module defines the standardized enum values used throughout the trader.
These enums name the failure kinds observed at the network boundary, the
retry modes, the order vocabulary and the phases of a history scan.

"""

from __future__ import annotations

import enum

# =============================================================================
# ERROR VOCABULARY
# =============================================================================


class ErrorKind(str, enum.Enum):
    """
    Machine-checkable failure kinds.

    The kind is set where a failure is first observed (transport layer,
    HTTP status, in-band error body) and is the only input the classifier
    consults when deciding between retry and abort.
    """

    TIMEOUT = "timeout"
    CONN_RESET = "conn_reset"
    CONN_REFUSED = "conn_refused"
    DNS_FAILURE = "dns_failure"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    API_MESSAGE = "api_message"
    OTHER = "other"

    @classmethod
    def from_status(cls, status: int) -> ErrorKind:
        """
        Derive the kind of a non-2xx HTTP status.

        Args:
            status: HTTP status code

        Returns:
            RATE_LIMITED for 429, SERVER_ERROR for 5xx, CLIENT_ERROR otherwise

        """
        if status == 429:
            return cls.RATE_LIMITED
        if 500 <= status <= 599:
            return cls.SERVER_ERROR
        return cls.CLIENT_ERROR

    @classmethod
    def from_message(cls, message: str) -> ErrorKind:
        """
        Derive a kind from the recognised transient message signatures.

        Used for errors that reach us without structure, e.g. exceptions
        raised by third-party code or plain in-band error text.
        """
        for signature, kind in _MESSAGE_SIGNATURES:
            if signature in message:
                return kind
        return cls.OTHER


_MESSAGE_SIGNATURES: tuple[tuple[str, ErrorKind], ...] = (
    ("SOCKETTIMEDOUT", ErrorKind.TIMEOUT),
    ("TIMEDOUT", ErrorKind.TIMEOUT),
    ("CONNRESET", ErrorKind.CONN_RESET),
    ("CONNREFUSED", ErrorKind.CONN_REFUSED),
    ("NOTFOUND", ErrorKind.DNS_FAILURE),
    ("Rate limit exceeded", ErrorKind.RATE_LIMITED),
    ("Response code 5", ErrorKind.SERVER_ERROR),
)


class RetryMode(str, enum.Enum):
    """Whether a retry policy has an attempt budget."""

    BOUNDED = "bounded"  # Gives up after max_attempts
    UNBOUNDED = "unbounded"  # Retries until success or a fatal error


# =============================================================================
# ORDER VOCABULARY
# =============================================================================


class OrderSide(str, enum.Enum):
    """Side of an order placed by the trader."""

    BUY = "buy"
    SELL = "sell"


class OrderStatus(str, enum.Enum):
    """
    Exchange order status values.

    Only DONE means the order is fully filled; every other value is
    reported as "not filled yet" by the trader.
    """

    DONE = "done"
    REJECTED = "rejected"
    PENDING = "pending"
    OPEN = "open"
    UNKNOWN = "unknown"

    @classmethod
    def from_exchange(cls, status: str | None) -> OrderStatus:
        """Convert an exchange status string, defaulting to UNKNOWN."""
        if not status:
            return cls.UNKNOWN
        try:
            return cls(status.lower())
        except ValueError:
            return cls.UNKNOWN


# =============================================================================
# HISTORY SCAN
# =============================================================================


class ScanPhase(str, enum.Enum):
    """Phases of the scanback state machine."""

    IDLE = "idle"
    SCANNING_BACKWARD = "scanning_backward"
    SCANNING_FORWARD = "scanning_forward"
    DONE = "done"
