"""
Configuration management for the CryptoCloud client.

Settings are read from ``CC_``-prefixed environment variables or a ``.env``
file:

    CC_API_KEY, CC_API_SECRET            credentials (required)
    CC_BASE_URL                          gateway root URL
    CC_TIMEOUT_MS                        per-request timeout
    CC_MAX_RETRIES, CC_RETRY_INITIAL_DELAY_MS, CC_RETRY_BACKOFF_MULTIPLIER
    CC_LOG_LEVEL
"""

from functools import lru_cache

import httpx
import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cryptocloud.domain.retry import RetryPolicy

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.cryptocloud.plus"


class Settings(BaseSettings):
    """CryptoCloud client settings."""

    # Credentials (Required)
    API_KEY: str = Field(
        ...,
        min_length=1,
        description="Merchant API key sent as X-API-KEY"
    )
    API_SECRET: str = Field(
        ...,
        min_length=1,
        description="Shared secret used to sign webhooks"
    )

    # Transport
    BASE_URL: str = Field(
        default=DEFAULT_BASE_URL,
        description="Gateway root URL"
    )
    TIMEOUT_MS: int = Field(
        default=10000,
        ge=1000,
        description="Per-request timeout in milliseconds"
    )

    # Retry policy
    MAX_RETRIES: int = Field(
        default=3,
        ge=0,
        description="Retries after the first attempt"
    )
    RETRY_INITIAL_DELAY_MS: int = Field(
        default=1000,
        gt=0,
        description="Delay before the first retry in milliseconds"
    )
    RETRY_BACKOFF_MULTIPLIER: float = Field(
        default=2.0,
        gt=1.0,
        description="Geometric growth factor between retries"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level for configure_logging()"
    )

    model_config = SettingsConfigDict(
        env_prefix="CC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator('BASE_URL')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate that the base URL is an absolute http(s) URL."""
        try:
            url = httpx.URL(v)
        except httpx.InvalidURL as e:
            raise ValueError(f"BASE_URL must be a valid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("BASE_URL must be a valid http(s) URL")
        return v.rstrip("/")

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return v

    @property
    def timeout_seconds(self) -> float:
        return self.TIMEOUT_MS / 1000

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy described by these settings."""
        return RetryPolicy(
            max_retries=self.MAX_RETRIES,
            initial_delay_seconds=self.RETRY_INITIAL_DELAY_MS / 1000,
            backoff_multiplier=self.RETRY_BACKOFF_MULTIPLIER,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get CryptoCloud settings from the environment.

    Raises pydantic ``ValidationError`` when required variables are missing.
    """
    settings = Settings()

    logger.info(
        "Settings loaded",
        base_url=settings.BASE_URL,
        timeout_ms=settings.TIMEOUT_MS,
        max_retries=settings.MAX_RETRIES
    )

    return settings
