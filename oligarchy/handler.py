"""
Save-file handler: loads a game on construction and saves explicit snapshots.
"""

from __future__ import annotations

import logging
import os
from typing import IO, List, Optional, Sequence, Union

from oligarchy.board import Board
from oligarchy.config import GameConfig
from oligarchy.game import GameState
from oligarchy.loader import load_game
from oligarchy.player import Player
from oligarchy.serializer import render, write_save
from oligarchy.settings import get_settings
from oligarchy.spaces import Square

logger = logging.getLogger(__name__)


class SaveFileHandler:
    """
    Loads a saved game and writes new saves.

    The handler is built from a path, an open text handle, or nothing at all,
    in which case the default save file from settings is loaded. Loading
    errors propagate out of the constructor as SaveFileError subclasses.
    """

    def __init__(
        self,
        source: Union[str, "os.PathLike[str]", IO[str], None] = None,
        config: Optional[GameConfig] = None,
    ):
        self.config = config or GameConfig.from_settings()
        if source is None:
            source = get_settings().default_file
        self._state = load_game(source, self.config)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def time(self) -> int:
        return self._state.elapsed_time

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def players(self) -> List[Player]:
        return list(self._state.players)

    @property
    def go_payout(self) -> int:
        return self._state.go_payout

    @property
    def jail_position(self) -> Optional[int]:
        return self._state.jail_position

    @property
    def active_players(self) -> int:
        return self._state.active_player_count

    @property
    def player_turn(self) -> Optional[int]:
        return self._state.turn_player_id

    def save(
        self,
        destination: Union[str, "os.PathLike[str]", IO[str]],
        time: int,
        players: Sequence[Player],
        squares: Union[Board, Sequence[Optional[Square]]],
        player_turn: Optional[int],
        go_payout: int,
    ) -> None:
        """
        Save a game snapshot.

        Every value is passed in by the caller; nothing the handler loaded is
        written implicitly.

        Args:
            destination: Path or open text handle to write to
            time: Elapsed game time
            players: All players, in the order they should be saved
            squares: The board, or its squares in position order
            player_turn: Id of the player whose turn it is
            go_payout: Amount paid for passing Go

        Raises:
            WriteFailureError: The save could not be written; a previous
                file at the same path is left as it was.
        """
        text = render(time, go_payout, players, list(squares), player_turn)
        write_save(destination, text, self.config.encoding)
        logger.info(f"Saved game with {len(players)} players at time {time}")
