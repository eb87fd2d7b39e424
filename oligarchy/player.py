"""
Player state and management.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from oligarchy.spaces import Property


class Player:
    """Represents the complete state of a player in the game."""

    def __init__(self, player_id: int, money: int, name: str, color: int = 0):
        self.player_id = player_id
        self.name = name
        self.color = color
        self.money = money
        self.position = 0
        self.loser = False
        self.in_jail = False
        self.jail_counter = 0
        self.properties: List[Property] = []

    def set_position(self, position: int) -> None:
        self.position = position

    def set_loser(self, loser: bool) -> None:
        self.loser = loser

    def set_color(self, color: int) -> None:
        self.color = color

    def go_to_jail(self) -> None:
        """Lock the player up with a fresh jail counter."""
        self.in_jail = True
        self.jail_counter = 0

    def add_to_jail_counter(self) -> None:
        """Count one more turn spent in jail."""
        self.jail_counter += 1

    def leave_jail(self) -> None:
        self.in_jail = False
        self.jail_counter = 0

    def add_property(self, prop: Property) -> None:
        """Take ownership of a property; the property points back at this player."""
        if not any(owned is prop for owned in self.properties):
            self.properties.append(prop)
        prop.set_owner(self)

    def remove_property(self, prop: Property) -> None:
        self.properties = [owned for owned in self.properties if owned is not prop]
        if prop.owner is self:
            prop.set_owner(None)

    def __repr__(self) -> str:
        return (
            f"Player(id={self.player_id}, name='{self.name}', "
            f"money={self.money}, position={self.position}, loser={self.loser})"
        )
