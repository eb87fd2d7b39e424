"""
Loading a game from the tab-delimited save format.

Records for players and squares may appear in any order, so loading happens
in two passes: every record is read into entities plus a pending-owner table,
then ownership and jail occupancy are linked once all players exist.
"""

from __future__ import annotations

import io
import logging
import os
from typing import IO, Dict, Iterable, List, Optional, Union

from oligarchy.board import Board
from oligarchy.config import GameConfig
from oligarchy.exceptions import MalformedRecordError, MissingFileError, SaveFileError
from oligarchy.game import GameState
from oligarchy.player import Player
from oligarchy.records import (
    GO_PAYOUT_TAG,
    GO_TAG,
    JAIL_TAG,
    PLAYER_TAG,
    PROPERTY_TAG,
    TIME_TAG,
    TURN_MARKER,
    Mortgaged,
    OwnerRef,
    decode_int,
    expect_fields,
    iter_records,
    parse_int,
    parse_mortgage_flag,
    parse_owner_slot,
)
from oligarchy.spaces import GoSquare, JailSquare, Property

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", IO[str]]


class SaveFileLoader:
    """Builds a GameState from save-file records. One instance per load."""

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig.from_settings()
        self.state = GameState(Board(self.config.number_of_tiles))
        # board position -> owner reference as written in the file
        self.pending_owners: Dict[int, int] = {}

    def load(self, lines: Iterable[str]) -> GameState:
        """Consume every line, then link owners and prisoners."""
        for line_number, fields in iter_records(lines):
            self.load_line(fields, line_number)
        self.set_square_owners()
        self.load_players_into_jail()
        return self.state

    def load_line(self, fields: List[str], line_number: Optional[int] = None) -> None:
        """Route one tokenized record to the loader for its tag."""
        tag = fields[0]
        if tag == TIME_TAG:
            expect_fields(fields, (2,), line_number)
            self.state.elapsed_time = parse_int(fields[1], "Time", line_number)
        elif tag == GO_PAYOUT_TAG:
            expect_fields(fields, (2,), line_number)
            self.state.go_payout = parse_int(fields[1], "GoPayout", line_number)
        elif tag == PLAYER_TAG:
            self.load_player(fields, line_number)
        else:
            self.load_square(fields, line_number)

    def load_player(self, fields: List[str], line_number: Optional[int] = None) -> None:
        """Player  id  name  color  money  position  turn-marker  jail-count"""
        expect_fields(fields, (8,), line_number)
        player_id = parse_int(fields[1], "Player id", line_number)
        money = parse_int(fields[4], "Player money", line_number)
        position = parse_int(fields[5], "Player position", line_number)
        color = decode_int(fields[3], "Player color", line_number)
        jail = parse_int(fields[7], "Player jail count", line_number)

        if any(p.player_id == player_id for p in self.state.players):
            raise MalformedRecordError(f"duplicate player id {player_id}", line_number=line_number)
        if not self.state.board.is_on_board(position):
            raise MalformedRecordError(
                f"player {player_id} position {position} is off the board", line_number=line_number
            )

        player = Player(player_id, money, fields[2])
        player.set_position(position)
        if player.money < 0:
            player.set_loser(True)
        player.set_color(color)

        if fields[6] == TURN_MARKER:
            if self.state.turn_player_id is not None:
                raise MalformedRecordError(
                    f"players {self.state.turn_player_id} and {player_id} both hold the turn marker",
                    line_number=line_number,
                )
            self.state.turn_player_id = player_id

        if jail >= 0:
            player.go_to_jail()
            for _ in range(jail):
                player.add_to_jail_counter()

        self.state.players.append(player)

    def load_square(self, fields: List[str], line_number: Optional[int] = None) -> None:
        """Build a Property, Jail or Go square; other tags are left for gap filling."""
        tag = fields[0]
        if tag not in (PROPERTY_TAG, JAIL_TAG, GO_TAG):
            logger.debug(f"Ignoring record with unknown tag {tag!r} on line {line_number}")
            return

        current = parse_int(fields[1], f"{tag} position", line_number)
        board = self.state.board
        if not board.is_on_board(current):
            raise MalformedRecordError(
                f"{tag} position {current} is off the board", line_number=line_number
            )
        if not board.is_empty(current):
            logger.warning(f"Square {current} redefined on line {line_number}")
            self.pending_owners.pop(current, None)
            if self.state.jail_position == current:
                self.state.jail_position = None

        if tag == PROPERTY_TAG:
            expect_fields(fields, (6, 7), line_number)
            price = parse_int(fields[3], "Property price", line_number)
            rent = parse_int(fields[4], "Property rent", line_number)
            if price < 0 or rent < 0:
                raise MalformedRecordError(
                    f"{fields[2]} has negative price or rent", line_number=line_number
                )
            prop = Property(fields[2], current, price, rent)
            slot = parse_owner_slot(fields[5], line_number)
            if isinstance(slot, Mortgaged):
                prop.set_mortgaged(True)
            elif isinstance(slot, OwnerRef):
                self.pending_owners[current] = slot.player_ref
            if len(fields) == 7 and parse_mortgage_flag(fields[6], line_number):
                prop.set_mortgaged(True)
            board.place(current, prop)
        elif tag == JAIL_TAG:
            expect_fields(fields, (2,), line_number)
            if self.state.jail_position is not None and self.state.jail_position != current:
                raise MalformedRecordError(
                    f"second Jail at {current}, already at {self.state.jail_position}",
                    line_number=line_number,
                )
            self.state.jail_position = current
            board.place(current, JailSquare(current))
        else:
            expect_fields(fields, (2,), line_number)
            board.place(current, GoSquare(current))

    def set_square_owners(self) -> None:
        """Fill empty positions with action squares and link each property to its owner."""
        board = self.state.board
        filled = board.fill_gaps()
        if filled:
            logger.debug(f"Filled {len(filled)} positions with action squares")

        by_id = self.state.players_by_id()
        for position, owner_ref in sorted(self.pending_owners.items()):
            prop = board.get_property(position)
            if prop is None or owner_ref < 0:
                continue
            player = by_id.get(owner_ref)
            if player is None:
                logger.warning(f"{prop.name} names unknown owner {owner_ref}; left unowned")
                continue
            if player.loser:
                logger.debug(f"Dropping {prop.name} from player {player.player_id}, who has lost")
                continue
            player.add_property(prop)

    def load_players_into_jail(self) -> None:
        """Put every incarcerated player into the Jail square."""
        prisoners = [p for p in self.state.players if p.in_jail]
        if not prisoners:
            return
        jail = self.state.jail
        if jail is None:
            raise MalformedRecordError(
                f"{len(prisoners)} players are in jail but the board has no Jail square"
            )
        for player in prisoners:
            jail.add_prisoner(player)


def load_game(source: Source, config: Optional[GameConfig] = None) -> GameState:
    """
    Load a game from a save file.

    Args:
        source: Path to the save file, or an open text handle. A handle is
            read but left open; a path is opened and closed here.
        config: Board constants; defaults to the environment settings.

    Returns:
        The reconstructed GameState.

    Raises:
        MissingFileError: the path cannot be opened.
        MalformedRecordError: a record has the wrong shape.
        NumericParseError: a numeric field does not parse.
    """
    loader = SaveFileLoader(config)
    if hasattr(source, "read"):
        name = getattr(source, "name", None)
        state = _load_lines(loader, source, name)
    else:
        path = os.fspath(source)
        try:
            f = open(path, "r", encoding=loader.config.encoding, newline="")
        except OSError as e:
            raise MissingFileError(f"cannot open save file: {e.strerror}", path=path) from e
        with f:
            state = _load_lines(loader, f, path)
        name = path

    logger.info(
        f"Loaded {name or 'save'}: {len(state.players)} players, "
        f"{state.active_player_count} active, time {state.elapsed_time}"
    )
    return state


def loads_game(text: str, config: Optional[GameConfig] = None) -> GameState:
    """Load a game from the text of a save file."""
    return load_game(io.StringIO(text), config)


def _load_lines(loader: SaveFileLoader, lines: Iterable[str], path: Optional[str]) -> GameState:
    try:
        return loader.load(lines)
    except SaveFileError as e:
        if e.path is None and path is not None:
            e.path = path
            e.args = (str(e),)
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise MissingFileError(f"cannot read save file: {e}", path=path) from e
