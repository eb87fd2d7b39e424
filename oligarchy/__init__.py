"""
Oligarchy save files

Loads and saves the full state of a property-trading board game in a
tab-delimited text format.
"""

from .game import GameState
from .player import Player
from .board import Board
from .config import GameConfig
from .spaces import ActionSquare, GoSquare, JailSquare, Property, Square, SpaceType
from .exceptions import (
    MalformedRecordError,
    MissingFileError,
    NumericParseError,
    OligarchyError,
    SaveFileError,
    WriteFailureError,
)
from .loader import load_game, loads_game
from .serializer import dump_game, dumps_game, save_game
from .handler import SaveFileHandler
from .snapshot import serialize_snapshot

__all__ = [
    "GameState",
    "Player",
    "Board",
    "GameConfig",
    "Square",
    "SpaceType",
    "Property",
    "JailSquare",
    "GoSquare",
    "ActionSquare",
    "OligarchyError",
    "SaveFileError",
    "MalformedRecordError",
    "NumericParseError",
    "MissingFileError",
    "WriteFailureError",
    "load_game",
    "loads_game",
    "dump_game",
    "dumps_game",
    "save_game",
    "SaveFileHandler",
    "serialize_snapshot",
]
