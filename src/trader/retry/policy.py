"""
Retry policy value object.

A policy is immutable and selected per operation kind: critical
(state-changing) operations use a bounded policy, idempotent reads use an
unbounded one.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.trader.enums import RetryMode


class RetryPolicy(BaseModel):
    """
    Backoff parameters for one family of operations.

    Delays start at min_delay and grow by backoff_factor per attempt,
    clamped at max_delay.
    """

    mode: RetryMode = Field(description="Bounded or unbounded retrying")
    max_attempts: int | None = Field(
        default=None,
        ge=1,
        description="Total attempts allowed (bounded mode only)",
    )
    backoff_factor: float = Field(default=1.2, ge=1.0)
    min_delay: float = Field(default=10.0, ge=0.0)
    max_delay: float = Field(default=60.0, ge=0.0)
    attempt_timeout: float | None = Field(default=None, gt=0.0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_bounds(self) -> "RetryPolicy":
        """Bounded policies need an attempt budget; delays must be ordered."""
        if self.mode == RetryMode.BOUNDED and self.max_attempts is None:
            raise ValueError("Bounded retry policy requires max_attempts")
        if self.mode == RetryMode.UNBOUNDED and self.max_attempts is not None:
            raise ValueError("Unbounded retry policy cannot set max_attempts")
        if self.max_delay < self.min_delay:
            raise ValueError("max_delay must not be lower than min_delay")
        return self

    @property
    def is_bounded(self) -> bool:
        return self.mode == RetryMode.BOUNDED

    def delay_for(self, retry: int) -> float:
        """
        Get the delay preceding a retry.

        Args:
            retry: Zero-based retry index (0 = delay after the first failure)

        Returns:
            Delay in seconds, clamped at max_delay

        """
        return min(self.min_delay * self.backoff_factor**retry, self.max_delay)

    def delays(self, count: int) -> list[float]:
        """Get the first `count` delays of the backoff sequence."""
        return [self.delay_for(retry) for retry in range(count)]

    def allows_attempt(self, attempt: int) -> bool:
        """Check whether a 1-based attempt number is within budget."""
        if self.max_attempts is None:
            return True
        return attempt <= self.max_attempts


CRITICAL = RetryPolicy(
    mode=RetryMode.BOUNDED,
    max_attempts=10,
    backoff_factor=1.2,
    min_delay=10.0,
    max_delay=60.0,
)

PATIENT = RetryPolicy(
    mode=RetryMode.UNBOUNDED,
    backoff_factor=1.2,
    min_delay=10.0,
    max_delay=300.0,
)
