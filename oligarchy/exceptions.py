"""
Exception hierarchy for the Oligarchy save-file layer.

Every load and save failure is raised to the caller as one of these types;
callers decide whether a failed load is fatal.
"""

from typing import Optional


class OligarchyError(Exception):
    """Base exception for all game-related errors."""


class SaveFileError(OligarchyError):
    """A save file could not be read, parsed or written."""

    def __init__(self, message: str, *, path: Optional[str] = None, line_number: Optional[int] = None):
        self.message = message
        self.path = path
        self.line_number = line_number
        super().__init__(str(self))

    def __str__(self) -> str:
        location = ""
        if self.path is not None:
            location = f"{self.path}"
        if self.line_number is not None:
            location = f"{location}:{self.line_number}" if location else f"line {self.line_number}"
        return f"{location}: {self.message}" if location else self.message


class MalformedRecordError(SaveFileError):
    """A record has the wrong shape for its tag."""


class NumericParseError(SaveFileError):
    """A field that must hold an integer does not."""


class MissingFileError(SaveFileError):
    """The save file does not exist or cannot be opened."""


class WriteFailureError(SaveFileError):
    """The game state could not be written out."""
