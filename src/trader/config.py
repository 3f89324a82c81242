"""
Trader configuration using Pydantic Settings.

This module provides configuration management for the trader adapter,
allowing environment-based configuration with type validation and defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.trader.enums import RetryMode
from src.trader.retry.policy import RetryPolicy


class ExchangeSettings(BaseSettings):
    """Exchange connection and account configuration."""

    model_config = SettingsConfigDict(env_prefix="TRADER_EXCHANGE_")

    # Connection settings
    api_url: str = "https://api.abucoins.com"
    key: str = Field(default="", description="Abucoins API key")
    secret: str = Field(default="", description="Abucoins API secret (base64)")
    passphrase: str = Field(default="", description="Abucoins API passphrase")
    request_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Total HTTP request timeout in seconds",
    )

    # Market settings
    asset: str = Field(default="BTC", description="Traded asset, e.g. 'ETH'")
    currency: str = Field(default="PLN", description="Quote currency, e.g. 'BTC'")
    post_only: bool = Field(
        default=True,
        description="Place maker-only orders",
    )

    @property
    def pair(self) -> str:
        """Product id in exchange notation, e.g. 'ETH-BTC'."""
        return f"{self.asset}-{self.currency}".upper()


class RetrySettings(BaseSettings):
    """Retry policy configuration for critical and patient operations."""

    model_config = SettingsConfigDict(env_prefix="TRADER_RETRY_")

    # Critical (state-changing) operations
    critical_max_attempts: int = Field(default=10, ge=1)
    critical_backoff_factor: float = Field(default=1.2, ge=1.0, le=5.0)
    critical_min_delay: float = Field(default=10.0, ge=0.0)
    critical_max_delay: float = Field(default=60.0, ge=0.0)

    # Patient (idempotent read) operations
    patient_backoff_factor: float = Field(default=1.2, ge=1.0, le=5.0)
    patient_min_delay: float = Field(default=10.0, ge=0.0)
    patient_max_delay: float = Field(default=300.0, ge=0.0)

    attempt_timeout: float | None = Field(
        default=None,
        gt=0.0,
        description="Per-attempt timeout in seconds (None = rely on HTTP timeout)",
    )

    def critical_policy(self) -> RetryPolicy:
        """Build the bounded policy used for state-changing operations."""
        return RetryPolicy(
            mode=RetryMode.BOUNDED,
            max_attempts=self.critical_max_attempts,
            backoff_factor=self.critical_backoff_factor,
            min_delay=self.critical_min_delay,
            max_delay=self.critical_max_delay,
            attempt_timeout=self.attempt_timeout,
        )

    def patient_policy(self) -> RetryPolicy:
        """Build the unbounded policy used for idempotent reads."""
        return RetryPolicy(
            mode=RetryMode.UNBOUNDED,
            backoff_factor=self.patient_backoff_factor,
            min_delay=self.patient_min_delay,
            max_delay=self.patient_max_delay,
            attempt_timeout=self.attempt_timeout,
        )


class ScanSettings(BaseSettings):
    """Trade history scanback configuration."""

    model_config = SettingsConfigDict(env_prefix="TRADER_SCAN_")

    batch_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Trades requested per page",
    )
    query_delay: float = Field(
        default=0.3,
        ge=0.0,
        description="Delay between consecutive page requests in seconds",
    )
    max_scan_attempts: int = Field(
        default=100,
        ge=1,
        description="Backward pages fetched before the cursor origin is rebased",
    )


class TraderSettings(BaseSettings):
    """Root configuration combining all sub-configs."""

    model_config = SettingsConfigDict(env_prefix="TRADER_")

    # Sub-configurations
    exchange: ExchangeSettings = Field(default_factory=ExchangeSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    scan: ScanSettings = Field(default_factory=ScanSettings)

    # Global settings
    debug: bool = False
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )

    @classmethod
    def from_env(cls) -> "TraderSettings":
        """
        Load configuration from environment variables.

        Returns:
            Configured TraderSettings instance

        """
        return cls(
            exchange=ExchangeSettings(),
            retry=RetrySettings(),
            scan=ScanSettings(),
        )
