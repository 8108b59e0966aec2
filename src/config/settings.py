"""Capability gate settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class UnknownIntentPolicy(StrEnum):
    """What the answerability gate does with an intent it has no rule for."""

    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"


class Settings(BaseSettings):
    """Application-wide settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    # --- Gate policy ---
    UNKNOWN_INTENT_POLICY: UnknownIntentPolicy = Field(
        default=UnknownIntentPolicy.FAIL_OPEN,
        description="Answerability verdict for intents missing from the requirement table.",
    )

    # --- Engine ---
    ENGINE_CACHE_SIZE: int = Field(
        default=0,
        ge=0,
        description="Max memoized engine results keyed by coverage hash (0 disables).",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == Environment.PROD


def get_settings() -> Settings:
    """Factory function for dependency injection via FastAPI Depends."""
    return Settings()
