from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables with validation."""

    model_config = SettingsConfigDict(
        env_file=(str(Path(__file__).resolve().parents[1] / ".env"), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    app_name: str = Field(default="Sporting Club", alias="APP_NAME")
    app_env: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        alias="APP_ENV",
    )
    database_url: str = Field(default="sqlite:///./sporting_club.db", alias="DATABASE_URL")
    db_echo: bool = Field(default=False, alias="DB_ECHO")
    seed_initial_data: bool = Field(default=True, alias="SEED_INITIAL_DATA")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, value: str) -> str:
        """Validate database URL is a SQLite SQLAlchemy-compatible connection string."""
        normalized = value.strip()
        if not normalized.lower().startswith("sqlite"):
            raise ValueError("DATABASE_URL must start with sqlite:// or sqlite+pysqlite://")
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise to upper case and require a standard logging level name."""
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {value!r}")
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()
