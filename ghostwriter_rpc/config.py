"""
Centralized Configuration Settings.

All environment variables are defined here using Pydantic Settings.
The Remote Content API base URL and the static service identifier are
required; the process refuses to start without them rather than sending
malformed requests.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Statuses treated as transient by the remote API client
RETRY_STATUS_CODES = frozenset({408, 413, 429, 500, 502, 503, 504})
RETRY_METHODS = frozenset({"GET", "POST"})
RETRY_AFTER_STATUS_CODES = frozenset({413, 429, 503})


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry policy for transient failures.

    Attributes:
        limit: Number of retries after the first attempt.
        status_codes: HTTP statuses that trigger a retry.
        methods: HTTP methods eligible for retry.
        delay: Base delay in seconds, doubled per attempt.
        max_delay: Upper bound for any single wait, including Retry-After.
    """

    limit: int = 2
    status_codes: frozenset[int] = RETRY_STATUS_CODES
    methods: frozenset[str] = RETRY_METHODS
    delay: float = 0.3
    max_delay: float = 5.0

    def backoff(self, attempt: int) -> float:
        """Delay before retry number ``attempt + 1``."""
        return min(self.delay * (2**attempt), self.max_delay)


@dataclass(frozen=True)
class ClientConfig:
    """Everything the remote API client needs, passed in at construction."""

    base_url: str
    user_id: str
    timeout: float = 10.0
    long_timeout: float = 120.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)


class Settings(BaseSettings):
    """Gateway settings with environment variable loading.

    Attributes:
        api_url: Base URL of the Remote Content API (GW_API_URL).
        user_id: Static service identifier sent as User-Id (GW_USER_ID).
        timeout_seconds: Timeout for short calls.
        long_timeout_seconds: Timeout for calls that run generation work.
        retry_limit: Retries for transient failures.
        retry_delay_seconds: Base backoff delay.
        retry_max_delay_seconds: Cap for a single backoff wait.
        service_name: Identifier for this service in logs and error bodies.
        host: Bind address for the gateway server.
        port: Bind port for the gateway server.
        structured_logging: Emit JSON logs instead of plain text.
        log_level: Root log level.
    """

    model_config = SettingsConfigDict(
        env_prefix="GW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Remote Content API
    # =========================================================================
    api_url: str
    user_id: str

    # =========================================================================
    # Timeouts & Retry
    # =========================================================================
    timeout_seconds: float = 10.0
    long_timeout_seconds: float = 120.0
    retry_limit: int = 2
    retry_delay_seconds: float = 0.3
    retry_max_delay_seconds: float = 5.0

    # =========================================================================
    # Service / Logging
    # =========================================================================
    service_name: str = "ghostwriter-gateway"
    host: str = "0.0.0.0"
    port: int = 8080
    structured_logging: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("timeout_seconds", "long_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("retry_limit")
    @classmethod
    def validate_retry_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must not be negative")
        return v

    def client_config(self) -> ClientConfig:
        """Build the immutable client configuration."""
        return ClientConfig(
            base_url=self.api_url,
            user_id=self.user_id,
            timeout=self.timeout_seconds,
            long_timeout=self.long_timeout_seconds,
            retry=RetryPolicy(
                limit=self.retry_limit,
                delay=self.retry_delay_seconds,
                max_delay=self.retry_max_delay_seconds,
            ),
        )


def load_settings(**overrides) -> Settings:
    """Load settings, failing fast with a ConfigurationError.

    Args:
        **overrides: Explicit values that take precedence over the environment.

    Returns:
        Settings: Validated configuration.

    Raises:
        ConfigurationError: If required variables are missing or invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        problems = []
        for err in e.errors():
            name = f"GW_{str(err['loc'][0]).upper()}" if err.get("loc") else "GW_*"
            problems.append(f"{name}: {err['msg']}")
        logger.error("Invalid configuration: %s", "; ".join(problems))
        raise ConfigurationError("Invalid configuration: " + "; ".join(problems), {"problems": problems}) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Use this function instead of creating Settings() directly
    to benefit from caching and ensure a single source of truth.
    """
    return load_settings()
