"""
Centralized configuration for the Ecobank Express client.

Values default from environment variables and are validated with Pydantic.
Components never read this module's global instance themselves; the facade
resolves it once and passes the pieces down.
"""

import os
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_LOG_FILE,
    DEFAULT_ORIGIN,
    TOKEN_CACHE_KEY,
    TOKEN_PATH,
    EnvironmentVariable,
    Limits,
    LogLevel,
    Timeouts,
)
from .exceptions import ConfigurationError
from .schemas.credential_schemas import Credentials


class ApiConfig(BaseModel):
    """Upstream endpoint configuration."""

    base_url: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.BASE_URL.value, DEFAULT_BASE_URL),
        description="Scheme and host of the upstream API",
    )
    origin: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.ORIGIN.value, DEFAULT_ORIGIN),
        description="Value of the Origin header",
    )
    token_path: str = Field(default=TOKEN_PATH, description="Token endpoint path")
    token_timeout: float = Field(
        default=Timeouts.TOKEN_REQUEST, gt=0, description="Token request timeout in seconds"
    )
    request_timeout: float = Field(
        default=Timeouts.API_REQUEST, gt=0, description="Business request timeout in seconds"
    )
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator("base_url")
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined with a leading slash."""
        return v.rstrip("/")


class RetryConfig(BaseModel):
    """Bounded retry on transient network errors."""

    max_attempts: int = Field(
        default=Limits.MAX_RETRY_ATTEMPTS, ge=1, description="Total attempts per HTTP call"
    )
    backoff_base: float = Field(
        default=Limits.DEFAULT_BACKOFF_SECONDS,
        ge=0,
        description="Base delay between attempts in seconds (0 retries immediately)",
    )
    backoff_max: float = Field(
        default=Limits.MAX_BACKOFF_SECONDS, ge=0, description="Maximum delay between attempts"
    )


class CacheConfig(BaseModel):
    """Shared token cache configuration."""

    redis_url: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.REDIS_URL.value, ""),
        description="Redis URL; empty keeps the token in process memory",
    )
    namespace: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.CACHE_NAMESPACE.value, ""),
        description="Key prefix shared with other applications on the same Redis",
    )
    token_key: str = Field(default=TOKEN_CACHE_KEY, description="Cache key of the bearer token")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.LOG_LEVEL.value, LogLevel.INFO.value),
        description="Logging level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string for the file sink",
    )
    log_file: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.LOG_FILE.value, DEFAULT_LOG_FILE),
        description="Request/response trace file; empty disables it",
    )

    @field_validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {level.value for level in LogLevel}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


def _credentials_from_env() -> Optional[Credentials]:
    values = {
        "user_id": os.getenv(EnvironmentVariable.USER_ID.value, ""),
        "password": os.getenv(EnvironmentVariable.PASSWORD.value, ""),
        "shared_secret": os.getenv(EnvironmentVariable.LAB_KEY.value, ""),
    }
    if not all(values.values()):
        return None
    return Credentials(**values)


class AppConfig(BaseModel):
    """Main application configuration."""

    environment: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.APP_ENV.value, "development"),
        description="Application environment",
    )
    credentials: Optional[Credentials] = Field(
        default_factory=_credentials_from_env, description="Upstream credentials"
    )

    api: ApiConfig = Field(default_factory=ApiConfig, description="Upstream configuration")
    retry: RetryConfig = Field(default_factory=RetryConfig, description="Retry configuration")
    cache: CacheConfig = Field(default_factory=CacheConfig, description="Cache configuration")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create configuration from environment variables."""
        return cls()

    def require_credentials(self) -> Credentials:
        """
        Return the credentials or fail naming the variables to set.

        Raises:
            ConfigurationError: If no credentials are configured
        """
        if self.credentials is None:
            missing: List[str] = [
                var.value
                for var in (
                    EnvironmentVariable.USER_ID,
                    EnvironmentVariable.PASSWORD,
                    EnvironmentVariable.LAB_KEY,
                )
                if not os.getenv(var.value)
            ]
            raise ConfigurationError(
                "Ecobank Express credentials are not configured",
                missing=missing,
            )
        return self.credentials


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
