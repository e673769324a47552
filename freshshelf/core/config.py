"""Configuration management for freshshelf."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Shop Configuration
    shop_timezone: str = Field(default="UTC", description="IANA timezone the shop operates in (e.g., 'Europe/Berlin')")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="production", description="Deployment environment reported to Logfire")
    log_level: str = Field(default="INFO", description="Minimum level for standard logging records")


# Application Constants
class Constants:
    """Application-wide constants."""

    # Expiry thresholds (days until expiry, inclusive upper bounds)
    EXPIRY_CRITICAL_DAYS: int = 5
    EXPIRY_WARNING_DAYS: int = 10

    # Category sort priority (lower sorts first)
    AGGREGATE_PRIORITY_CRITICAL: int = 0
    AGGREGATE_PRIORITY_WARNING: int = 1
    AGGREGATE_PRIORITY_OK: int = 2

    # Display captions
    EXPIRED_LABEL: str = "EXPIRED"
    EXPIRES_LABEL_PREFIX: str = "Expires:"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
