"""Retry policies, error classification and the retry executor."""

from src.trader.retry.classifier import classify, is_transient
from src.trader.retry.executor import RetryExecutor
from src.trader.retry.policy import CRITICAL, PATIENT, RetryPolicy

__all__ = [
    "CRITICAL",
    "PATIENT",
    "RetryExecutor",
    "RetryPolicy",
    "classify",
    "is_transient",
]
