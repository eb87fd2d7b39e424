"""
Writing a game to the tab-delimited save format.

The output mirrors what the loader reads: Time, GoPayout, one Player record
per player, a blank line, then one record per Property, Jail and Go square.
Action squares are not written; the loader recreates them from the gaps.
"""

from __future__ import annotations

import logging
import os
import tempfile
from typing import IO, Iterable, List, Optional, Sequence, Union

from oligarchy.exceptions import WriteFailureError
from oligarchy.game import GameState
from oligarchy.player import Player
from oligarchy.records import (
    GO_PAYOUT_TAG,
    GO_TAG,
    JAIL_TAG,
    MORTGAGED_MARKER,
    NO_OWNER,
    NO_TURN_MARKER,
    NOT_IN_JAIL,
    PLAYER_TAG,
    PROPERTY_TAG,
    TIME_TAG,
    TURN_MARKER,
    UNMORTGAGED_MARKER,
)
from oligarchy.spaces import GoSquare, JailSquare, Property, Square

logger = logging.getLogger(__name__)

Destination = Union[str, "os.PathLike[str]", IO[str]]


def _record(*fields: object) -> str:
    return "\t".join(str(f) for f in fields)


def _text_field(value: str, what: str) -> str:
    if not value:
        raise WriteFailureError(f"{what} is empty")
    if any(c in value for c in "\t\r\n"):
        raise WriteFailureError(f"{what} {value!r} contains a tab or line break")
    return value


def format_color(color: int) -> str:
    """Write a colour as a hex literal the loader decodes."""
    sign = "-" if color < 0 else ""
    return f"{sign}0x{abs(color):06x}"


def player_record(player: Player, player_turn: Optional[int]) -> str:
    marker = TURN_MARKER if player.player_id == player_turn else NO_TURN_MARKER
    jail = player.jail_counter if player.in_jail else NOT_IN_JAIL
    return _record(
        PLAYER_TAG,
        player.player_id,
        _text_field(player.name, "player name"),
        format_color(player.color),
        player.money,
        player.position,
        marker,
        jail,
    )


def square_record(square: Optional[Square], index: int) -> Optional[str]:
    """Render one square, or None for squares that are not written."""
    if isinstance(square, Property):
        owner = square.owner.player_id if square.owner is not None else NO_OWNER
        return _record(
            PROPERTY_TAG,
            index,
            _text_field(square.name, "property name"),
            square.price,
            square.rent,
            owner,
            MORTGAGED_MARKER if square.mortgaged else UNMORTGAGED_MARKER,
        )
    if isinstance(square, JailSquare):
        return _record(JAIL_TAG, index)
    if isinstance(square, GoSquare):
        return _record(GO_TAG, index)
    return None


def render_lines(
    time: int,
    go_payout: int,
    players: Iterable[Player],
    squares: Sequence[Optional[Square]],
    player_turn: Optional[int],
) -> List[str]:
    """Render a full save file as a list of lines without terminators."""
    lines = [_record(TIME_TAG, time), _record(GO_PAYOUT_TAG, go_payout)]
    lines.extend(player_record(p, player_turn) for p in players)
    lines.append("")
    for index, square in enumerate(squares):
        line = square_record(square, index)
        if line is not None:
            lines.append(line)
    return lines


def render(
    time: int,
    go_payout: int,
    players: Iterable[Player],
    squares: Sequence[Optional[Square]],
    player_turn: Optional[int],
) -> str:
    return "".join(line + "\n" for line in render_lines(time, go_payout, players, squares, player_turn))


def write_save(
    destination: Destination,
    text: str,
    encoding: str = "utf-8",
) -> None:
    """
    Write rendered save text to a path or an open text handle.

    A path is written through a temporary file in the same directory that
    replaces the target only once it is complete, so a failed save leaves any
    previous file untouched.
    """
    if hasattr(destination, "write"):
        try:
            destination.write(text)
            destination.flush()
        except (OSError, ValueError) as e:
            raise WriteFailureError(f"cannot write save: {e}") from e
        return

    path = os.fspath(destination)
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            newline="",
            dir=directory,
            prefix=".",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
    except (OSError, UnicodeEncodeError) as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise WriteFailureError(f"cannot write save file: {e}", path=path) from e


def dumps_game(state: GameState) -> str:
    """Render a GameState as save-file text."""
    return render(
        state.elapsed_time,
        state.go_payout,
        state.players,
        list(state.board),
        state.turn_player_id,
    )


def dump_game(state: GameState, fp: IO[str]) -> None:
    """Write a GameState to an open text handle."""
    write_save(fp, dumps_game(state))


def save_game(destination: Destination, state: GameState, encoding: str = "utf-8") -> None:
    """Save a GameState to a path or an open text handle."""
    write_save(destination, dumps_game(state), encoding)
    logger.info(f"Saved game with {len(state.players)} players at time {state.elapsed_time}")

