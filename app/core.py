"""Application configuration and settings management.

This module defines the application settings loaded from environment
variables and provides helpers for accessing cached settings and
configuring logging.
"""

import logging
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Attributes:
        DATABASE_URL: Database connection string.
        ALLOWED_ORIGINS: Allowed origins for CORS.
        PASSWORD_SCHEMES: passlib hashing schemes, the first one is used
            for new hashes.
        TOKEN_BYTES: Number of random bytes in an API token.
        LOG_LEVEL: Root logging level.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="allow")

    DATABASE_URL: str = "sqlite:///./contacts.db"
    ALLOWED_ORIGINS: List[str] = ["*"]
    PASSWORD_SCHEMES: List[str] = ["bcrypt"]
    TOKEN_BYTES: int = 32
    LOG_LEVEL: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The settings object is cached to prevent reloading environment
    variables multiple times during application lifetime.
    """

    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger for the application.

    Args:
        level (str): Logging level name, e.g. ``"INFO"`` or ``"DEBUG"``.
    """

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
