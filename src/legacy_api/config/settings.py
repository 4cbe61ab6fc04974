"""Application settings and environment-driven configuration."""

import typing as t
from enum import Enum

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_AUTH_SCHEME,
    DEFAULT_DEVICE_ID,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY_MILLISECONDS,
    DEFAULT_SHOULD_RETRY,
)


class Environment(str, Enum):
    """Runtime environment for the application."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Log levels understood by loguru."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Process-wide configuration for the legacy API client.

    Values are read from ``LEGACY_API_*`` environment variables, e.g.
    ``LEGACY_API_BASE_URL``. Every request-level option here acts as the
    instance default that a RequestSpec may override per call.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEGACY_API_",
        frozen=True,
    )

    environment: Environment = Environment.PRODUCTION
    log_level: LogLevel = LogLevel.INFO

    base_url: str = Field(
        default="http://localhost",
        description="Root URL of the legacy API (without the /api/<version> part)",
    )
    api_version: str = Field(default=DEFAULT_API_VERSION, min_length=1)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, gt=0)
    retry_delay_milliseconds: int = Field(
        default=DEFAULT_RETRY_DELAY_MILLISECONDS, ge=0
    )
    should_retry: bool = DEFAULT_SHOULD_RETRY

    device_id: str = Field(default=DEFAULT_DEVICE_ID, description="X-Device-Id value")
    auth_scheme: str = Field(default=DEFAULT_AUTH_SCHEME)
    access_token: SecretStr | None = Field(
        default=None,
        description="Static access token used when no token provider is injected",
    )


def build_settings(**overrides: t.Any) -> Settings:
    """Build Settings, ignoring overrides that are None.

    Lets the CLI pass every option straight through without clobbering
    environment or default values for options the user did not set.
    """
    filtered = {key: value for key, value in overrides.items() if value is not None}
    return Settings(**filtered)
