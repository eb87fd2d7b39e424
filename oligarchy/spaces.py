"""
Board square definitions and types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from oligarchy.player import Player


class SpaceType(Enum):
    """Types of squares on the board."""

    GO = "go"
    PROPERTY = "property"
    JAIL = "jail"
    ACTION = "action"


@dataclass
class Square:
    """Base class for a board square."""

    name: str
    position: int
    space_type: SpaceType

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', position={self.position})"


@dataclass
class GoSquare(Square):
    """The Go square."""

    def __init__(self, position: int = 0):
        super().__init__("Go", position, SpaceType.GO)


@dataclass
class ActionSquare(Square):
    """A square with no state of its own; the game rules decide what happens there."""

    def __init__(self, position: int, name: str = "Action"):
        super().__init__(name, position, SpaceType.ACTION)


@dataclass
class Property(Square):
    """
    A square that can be owned, rented and mortgaged.

    The owner is a shared reference to a Player and is not part of equality,
    so comparing two boards never walks back into the player graph.
    """

    price: int
    rent: int
    mortgaged: bool

    def __init__(self, name: str, position: int, price: int, rent: int):
        super().__init__(name, position, SpaceType.PROPERTY)
        self.price = price
        self.rent = rent
        self.mortgaged = False
        self.owner: Optional[Player] = None

    def is_owned(self) -> bool:
        """Check if the property is owned by any player."""
        return self.owner is not None

    def set_owner(self, player: Optional[Player]) -> None:
        self.owner = player

    def set_mortgaged(self, mortgaged: bool) -> None:
        self.mortgaged = mortgaged

    def __repr__(self) -> str:
        owner = self.owner.player_id if self.owner is not None else None
        return (
            f"Property(name='{self.name}', position={self.position}, price={self.price}, "
            f"rent={self.rent}, owner={owner}, mortgaged={self.mortgaged})"
        )


@dataclass
class JailSquare(Square):
    """The Jail square and the players currently held there."""

    def __init__(self, position: int, name: str = "Jail"):
        super().__init__(name, position, SpaceType.JAIL)
        self.prisoners: List[Player] = []

    def add_prisoner(self, player: Player) -> None:
        self.prisoners.append(player)

    def remove_prisoner(self, player: Player) -> None:
        self.prisoners.remove(player)
