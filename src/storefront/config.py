"""Application settings.

Loaded from environment variables (and an optional .env file) with
pydantic-settings. Values are validated once at startup.

Usage:
    from storefront.config import get_settings
    settings = get_settings()
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment",
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level when DEBUG is off",
    )

    SERVICE_NAME: str = Field(
        default="admin-api",
        description="Service name reported by the health endpoint",
    )

    APP_VERSION: str = Field(
        default="1.0.0",
        description="Version reported by the health endpoint",
    )

    DATABASE_URL: str = Field(
        default="sqlite:///data/storefront.db",
        description="SQLAlchemy database URL",
    )

    AUTH_PROVIDER: Literal["disabled", "mock"] = Field(
        default="disabled",
        description="Authentication provider backing sign-out",
    )

    # Comma-separated, parsed by cors_origins_list
    CORS_ORIGINS: str = Field(
        default="http://localhost:9002",
        description="Allowed CORS origins (comma-separated)",
    )

    IMAGE_FALLBACK_URL: str = Field(
        default="https://placehold.co/80x80.png",
        description="Image shown when a product image cannot be loaded",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list, dropping blanks."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def log_level(self) -> int:
        """Effective numeric log level."""
        if self.DEBUG:
            return logging.DEBUG
        return logging.getLevelName(self.LOG_LEVEL)


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance.

    Returns:
        Settings parsed from the environment on first call.
    """
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the service.

    Args:
        settings: Settings providing DEBUG and LOG_LEVEL.
    """
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
