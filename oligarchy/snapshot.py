"""
Public snapshot serialization of GameState.

Produces a plain, JSON-friendly view of a loaded game. Two states that
snapshot equal hold the same persisted information.
"""

from __future__ import annotations

from typing import Any, Dict, List

from oligarchy.game import GameState
from oligarchy.spaces import JailSquare, Property


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a stable JSON dict.

    The snapshot includes:
    - elapsed time, go payout and current_player_id
    - players with their money, position, jail state and owned properties
    - every square with its type, and for properties price/rent/owner/mortgage
    - the jail position, its prisoners and the active player count
    """
    players: List[Dict[str, Any]] = []
    for player in game.players:
        players.append(
            {
                "player_id": player.player_id,
                "name": player.name,
                "color": player.color,
                "money": player.money,
                "position": player.position,
                "is_loser": player.loser,
                "in_jail": player.in_jail,
                "jail_counter": player.jail_counter,
                "is_current": player.player_id == game.turn_player_id,
                "properties": sorted(p.position for p in player.properties),
            }
        )

    squares: List[Dict[str, Any]] = []
    for space in game.board:
        if space is None:
            continue
        entry: Dict[str, Any] = {
            "position": space.position,
            "type": space.space_type.value,
            "name": space.name,
        }
        if isinstance(space, Property):
            entry["price"] = space.price
            entry["rent"] = space.rent
            entry["owner_id"] = space.owner.player_id if space.owner is not None else None
            entry["mortgaged"] = space.mortgaged
        elif isinstance(space, JailSquare):
            entry["prisoners"] = [p.player_id for p in space.prisoners]
        squares.append(entry)

    snapshot: Dict[str, Any] = {
        "elapsed_time": game.elapsed_time,
        "go_payout": game.go_payout,
        "current_player_id": game.turn_player_id,
        "jail_position": game.jail_position,
        "active_player_count": game.active_player_count,
        "players": players,
        "board": squares,
    }

    return snapshot
