"""Configuration management with pydantic-settings and validation."""

import logging
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Preference store settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PREFSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database Configuration
    database_url: str = "sqlite:///./prefstore.db"
    sql_echo: bool = False

    # Logging
    log_level: str = "INFO"

    # Preference engine behaviour
    strict_key_folding: bool = False
    assoc_expiry_mode: Literal["legacy", "consistent"] = "legacy"

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_url(cls, v):
        """Heroku-style URLs use postgres:// but SQLAlchemy requires postgresql://."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator("database_url", mode="after")
    @classmethod
    def check_not_empty(cls, v):
        if v.strip() == "":
            raise ValueError("Database URL is empty")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in logging.getLevelNamesMapping():
                raise ValueError(f"Unknown log level: {v}")
        return v


def get_settings() -> Settings:
    """Load and validate settings from environment.

    Raises:
        ValidationError: If environment variables are invalid.
    """
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging for applications embedding the store."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
