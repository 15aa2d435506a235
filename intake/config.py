"""
Runtime configuration.

Everything the storage layer and the app need is passed in explicitly,
so tests can build an app around a temporary data directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rules import CSV_FILENAME, JSONL_FILENAME

DEFAULT_PORT = 3000
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def default_data_dir() -> Path:
    # relative to the directory the service is started from
    return Path.cwd() / "data"


class StorageConfig(BaseModel):
    data_dir: Path = Field(default_factory=default_data_dir)

    @property
    def jsonl_path(self) -> Path:
        return self.data_dir / JSONL_FILENAME

    @property
    def csv_path(self) -> Path:
        return self.data_dir / CSV_FILENAME


class Settings(BaseSettings):
    """Service settings, read from INTAKE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INTAKE_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
    )

    host: str = "0.0.0.0"
    port: int = Field(
        default=DEFAULT_PORT,
        validation_alias=AliasChoices("INTAKE_PORT", "PORT"),
    )
    log_level: str = "INFO"
    # JSON list in the environment, e.g. INTAKE_CORS_ORIGINS='["https://example.com"]'
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    data_dir: Path = Field(default_factory=default_data_dir)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def storage(self) -> StorageConfig:
        return StorageConfig(data_dir=self.data_dir)


def configure_logging(settings: Settings) -> None:
    # leave logging alone if the host (uvicorn, pytest) already set it up
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=settings.log_level,
            format=LOG_FORMAT,
            handlers=[logging.StreamHandler()],
        )
