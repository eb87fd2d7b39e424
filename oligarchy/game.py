"""
Game state as restored from, and written to, a save file.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from oligarchy.board import Board
from oligarchy.player import Player
from oligarchy.spaces import JailSquare


class GameState:
    """
    Represents the complete persisted state of a game.

    The rules engine mutates this between saves; the save-file layer only
    builds it on load and reads it on save.
    """

    def __init__(
        self,
        board: Board,
        players: Optional[List[Player]] = None,
        elapsed_time: int = 0,
        go_payout: int = 0,
        turn_player_id: Optional[int] = None,
        jail_position: Optional[int] = None,
    ):
        self.board = board
        self.players: List[Player] = list(players) if players is not None else []
        self.elapsed_time = elapsed_time
        self.go_payout = go_payout
        self.turn_player_id = turn_player_id
        self.jail_position = jail_position

    @property
    def active_player_count(self) -> int:
        """Number of players that have not lost."""
        return len(self.get_active_players())

    @property
    def jail(self) -> Optional[JailSquare]:
        """The board's Jail square, if it has one."""
        if self.jail_position is None:
            return None
        space = self.board[self.jail_position]
        return space if isinstance(space, JailSquare) else None

    def players_by_id(self) -> Dict[int, Player]:
        return {p.player_id: p for p in self.players}

    def get_player(self, player_id: int) -> Optional[Player]:
        """Get a player by id, or None if no such player exists."""
        return self.players_by_id().get(player_id)

    def get_current_player(self) -> Optional[Player]:
        """Get the player holding the turn marker."""
        if self.turn_player_id is None:
            return None
        return self.get_player(self.turn_player_id)

    def get_active_players(self) -> List[Player]:
        """Get all players that have not lost."""
        return [p for p in self.players if not p.loser]

    def __repr__(self) -> str:
        return (
            f"GameState(time={self.elapsed_time}, players={len(self.players)}, "
            f"turn={self.turn_player_id}, jail={self.jail_position})"
        )
