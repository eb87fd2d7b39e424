"""
Tokenizing and field parsing for the tab-delimited save format.

A record is one line split on runs of tab characters. Lines that yield fewer
than two fields are blank or separator lines and carry no data.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from oligarchy.exceptions import MalformedRecordError, NumericParseError

FIELD_SEPARATOR = re.compile(r"\t+")
DECIMAL = re.compile(r"[+-]?[0-9]+")

TIME_TAG = "Time"
GO_PAYOUT_TAG = "GoPayout"
PLAYER_TAG = "Player"
PROPERTY_TAG = "Property"
JAIL_TAG = "Jail"
GO_TAG = "Go"

TURN_MARKER = "*"
NO_TURN_MARKER = "-"
MORTGAGED_MARKER = "m"
UNMORTGAGED_MARKER = "u"
NOT_IN_JAIL = -1
NO_OWNER = -1

_DIGITS = {
    8: set("01234567"),
    10: set("0123456789"),
    16: set("0123456789abcdefABCDEF"),
}


def tokenize(line: str) -> List[str]:
    """Split a line into fields, dropping the line terminator and trailing empty fields."""
    fields = FIELD_SEPARATOR.split(line.rstrip("\r\n"))
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def iter_records(lines: Iterable[str]) -> Iterator[Tuple[int, List[str]]]:
    """Yield (line_number, fields) for every line that holds a record."""
    for line_number, line in enumerate(lines, start=1):
        fields = tokenize(line)
        if len(fields) > 1:
            yield line_number, fields


def parse_int(text: str, field: str, line_number: Optional[int] = None) -> int:
    """Parse a plain decimal integer field."""
    if not DECIMAL.fullmatch(text):
        raise NumericParseError(f"{field} must be an integer, got {text!r}", line_number=line_number)
    return int(text)


def decode_int(text: str, field: str, line_number: Optional[int] = None) -> int:
    """
    Parse an integer literal whose radix is given by its prefix.

    Accepts an optional sign followed by ``0x``/``0X``/``#`` (hex), a leading
    ``0`` (octal) or plain decimal digits, which is how colours are written.
    """
    body = text
    sign = 1
    if body[:1] in ("-", "+"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]

    if body[:2] in ("0x", "0X"):
        digits, radix = body[2:], 16
    elif body[:1] == "#":
        digits, radix = body[1:], 16
    elif body.startswith("0") and len(body) > 1:
        digits, radix = body[1:], 8
    else:
        digits, radix = body, 10

    # int() tolerates signs, spaces and underscores that a literal must not carry
    if not digits or not set(digits) <= _DIGITS[radix]:
        raise NumericParseError(
            f"{field} must be an integer literal, got {text!r}", line_number=line_number
        )
    return sign * int(digits, radix)


def expect_fields(fields: List[str], counts: Tuple[int, ...], line_number: Optional[int] = None) -> None:
    """Raise unless the record has one of the allowed field counts (tag included)."""
    if len(fields) not in counts:
        expected = " or ".join(str(c) for c in counts)
        raise MalformedRecordError(
            f"{fields[0]} record needs {expected} fields, got {len(fields)}",
            line_number=line_number,
        )


@dataclass(frozen=True)
class OwnerRef:
    """The owner slot names a player."""

    player_ref: int


@dataclass(frozen=True)
class Mortgaged:
    """The owner slot holds the mortgage marker instead of a player."""


OwnerSlot = Union[OwnerRef, Mortgaged]


def parse_owner_slot(text: str, line_number: Optional[int] = None) -> OwnerSlot:
    """Read the overloaded owner slot of a Property record."""
    if text == MORTGAGED_MARKER:
        return Mortgaged()
    return OwnerRef(parse_int(text, "Property owner", line_number))


def parse_mortgage_flag(text: str, line_number: Optional[int] = None) -> bool:
    if text == MORTGAGED_MARKER:
        return True
    if text == UNMORTGAGED_MARKER:
        return False
    raise MalformedRecordError(
        f"mortgage flag must be {MORTGAGED_MARKER!r} or {UNMORTGAGED_MARKER!r}, got {text!r}",
        line_number=line_number,
    )
