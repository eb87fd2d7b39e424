"""
Save-file configuration using pydantic-settings.

Environment variables (prefix: OLIGARCHY_):
    OLIGARCHY_DEFAULT_FILE    - Save file used when none is given (default: defaultFile.txt)
    OLIGARCHY_NUMBER_OF_TILES - Board size (default: 40)
    OLIGARCHY_ENCODING        - Text encoding of save files (default: utf-8)
    OLIGARCHY_LOG_LEVEL       - Logging level for the CLI (default: INFO)
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SaveFileSettings(BaseSettings):
    """Configuration for reading and writing save files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="OLIGARCHY_",
    )

    default_file: str = Field(
        default="defaultFile.txt",
        description="Save file loaded when no source is given.",
    )
    number_of_tiles: int = Field(
        default=40,
        gt=0,
        description="Number of squares on the board.",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of save files.",
    )
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept only level names the logging module knows."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> SaveFileSettings:
    """Return cached settings instance."""
    return SaveFileSettings()
