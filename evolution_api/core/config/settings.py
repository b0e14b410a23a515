"""
Configuration for the Evolution API client.

``EvolutionConfig`` is the immutable configuration value handed to the transport
and the resource client. ``Settings`` reads it from environment variables (and a
local ``.env`` file) for applications that prefer environment-based setup.
"""

import os
from importlib.metadata import PackageNotFoundError, version

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DISTRIBUTION_NAME = "evolution-api-client"
DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_WEBHOOK_EVENTS = ["connection.update", "message.upsert"]


def get_package_version() -> str:
    """Installed distribution version, or "0.0.0" when running from an uninstalled tree."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0"


class EvolutionConfig(BaseModel):
    """Connection, retry and pass-through settings for one client.

    The transport reads ``base_url``, ``api_key``, ``timeout``,
    ``retry_attempts`` and ``retry_delay`` on every request. The webhook and
    logging fields are carried for callers and never interpreted by the core.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    base_url: str = Field(DEFAULT_BASE_URL, min_length=1)
    api_key: str | None = None
    timeout: float = Field(30.0, gt=0, description="Per-attempt timeout in seconds")
    retry_attempts: int = Field(3, ge=0)
    retry_delay: float = Field(1.0, ge=0, description="Seconds between retries")

    webhook_url: str | None = None
    webhook_events: tuple[str, ...] = Field(
        default_factory=lambda: tuple(DEFAULT_WEBHOOK_EVENTS)
    )
    log_level: str = "INFO"

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("api_key", "webhook_url")
    @classmethod
    def empty_to_none(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    def with_overrides(self, **changes) -> "EvolutionConfig":
        """Return a new validated config with ``changes`` applied."""
        return EvolutionConfig.model_validate({**self.model_dump(), **changes})


class Settings:
    """Environment-based settings with a `.env` file for local development."""

    def __init__(self, env_file: str | None = ".env"):
        if env_file:
            load_dotenv(env_file)

        self.version: str = get_package_version()

        # ================================================================
        # Evolution API Connection
        # ================================================================
        self.base_url: str = os.getenv("EVOLUTION_API_BASE_URL", DEFAULT_BASE_URL)
        self.api_key: str | None = os.getenv("EVOLUTION_API_KEY")
        self.timeout: float = float(os.getenv("EVOLUTION_API_TIMEOUT", "30"))
        self.retry_attempts: int = int(os.getenv("EVOLUTION_API_RETRY_ATTEMPTS", "3"))
        self.retry_delay: float = float(os.getenv("EVOLUTION_API_RETRY_DELAY", "1"))

        # ================================================================
        # Webhook pass-through
        # ================================================================
        self.webhook_url: str | None = os.getenv("EVOLUTION_WEBHOOK_URL")
        events = os.getenv("EVOLUTION_WEBHOOK_EVENTS")
        self.webhook_events: list[str] = (
            [e.strip() for e in events.split(",") if e.strip()]
            if events
            else list(DEFAULT_WEBHOOK_EVENTS)
        )

        # ================================================================
        # Logging
        # ================================================================
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "PROD").upper()
        if self.environment not in ("DEV", "PROD"):
            self.environment = "PROD"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"

    def to_config(self) -> EvolutionConfig:
        """Build the validated client configuration from these settings."""
        return EvolutionConfig(
            base_url=self.base_url,
            api_key=self.api_key,
            timeout=self.timeout,
            retry_attempts=self.retry_attempts,
            retry_delay=self.retry_delay,
            webhook_url=self.webhook_url,
            webhook_events=tuple(self.webhook_events),
            log_level=self.log_level,
        )
