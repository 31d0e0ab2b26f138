"""Lightweight configuration for the reignmaker engine."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, overridable through the environment or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="REIGNMAKER_"
    )

    data_dir: Path = Field(default=Path("kingdoms"), description="Where kingdom snapshots live")
    database_url: str = Field(
        default="sqlite:///reignmaker.db",
        description="SQLAlchemy URL for phase step persistence",
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements")
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
