"""Configuration management for the race analytics engine."""

import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Analysis thresholds are not settings; they are constants in the
    service modules.
    """

    model_config = SettingsConfigDict(
        env_prefix="RACE_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Offline Ergast/Jolpica snapshots, laid out as <data_dir>/<season>/<round>/
    data_dir: Path = Path("./data/snapshots")

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None

    # Show full error payloads in the CLI
    debug: bool = False

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize the level name and reject unknown levels."""
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


# Global settings instance
settings = Settings()
