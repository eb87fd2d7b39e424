"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import Optional

from oligarchy.settings import SaveFileSettings, get_settings


@dataclass(frozen=True)
class GameConfig:
    """Board constants a save file is read against."""

    number_of_tiles: int = 40
    encoding: str = "utf-8"

    @classmethod
    def from_settings(cls, settings: Optional[SaveFileSettings] = None) -> "GameConfig":
        """Build a config from environment-backed settings."""
        settings = settings or get_settings()
        return cls(number_of_tiles=settings.number_of_tiles, encoding=settings.encoding)
