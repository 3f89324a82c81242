"""
Exception hierarchy for the trader adapter.

Every failure the trader raises derives from TraderError. Raw failures
observed at the network boundary are ExchangeError instances carrying an
ErrorKind; the classifier turns them into TransientError (retry) or
FatalError (abort). ParseError signals a data contract violation and is
never retried.
"""

from src.trader.enums import ErrorKind

ERROR_PREFIX = "[abucoins] "


class TraderError(Exception):
    """Base class for all trader errors."""


class ExchangeError(TraderError):
    """
    Raw failure observed while talking to the exchange.

    Attributes:
        message: Human-readable description of the failure
        kind: Structured failure kind used for classification
        status: HTTP status code, when one was received

    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind if kind is not None else ErrorKind.from_message(message)
        self.status = status

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExchangeError":
        """Wrap an arbitrary exception, deriving the kind from its text."""
        if isinstance(exc, ExchangeError):
            return exc
        message = str(exc) or type(exc).__name__
        return cls(message)

    def __repr__(self) -> str:
        return f"ExchangeError({self.message!r}, kind={self.kind.value})"


class ClassifiedError(TraderError):
    """An ExchangeError after classification."""

    def __init__(self, cause: ExchangeError) -> None:
        super().__init__(ERROR_PREFIX + cause.message)
        self.cause = cause

    @property
    def kind(self) -> ErrorKind:
        return self.cause.kind


class TransientError(ClassifiedError):
    """Failure expected to resolve itself on retry."""


class FatalError(ClassifiedError):
    """Failure that will not resolve by retrying."""


class ParseError(TraderError):
    """Malformed numeric or timestamp field in an exchange payload."""


class ScanInProgressError(TraderError):
    """A history scan was requested while another one is running."""
