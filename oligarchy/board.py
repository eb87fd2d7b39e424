"""
Board layout: a fixed ring of squares indexed by position.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from oligarchy.spaces import ActionSquare, JailSquare, Property, Square


class Board:
    """A fixed-length ring of squares; a square's index is its identity."""

    def __init__(self, size: int = 40, squares: Optional[Sequence[Optional[Square]]] = None):
        if squares is not None and len(squares) != size:
            raise ValueError(f"Board needs exactly {size} squares, got {len(squares)}")
        self.size = size
        self.spaces: List[Optional[Square]] = list(squares) if squares is not None else [None] * size

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Optional[Square]]:
        return iter(self.spaces)

    def __getitem__(self, position: int) -> Optional[Square]:
        return self.spaces[position]

    def is_on_board(self, position: int) -> bool:
        return 0 <= position < self.size

    def get_space(self, position: int) -> Square:
        """Get the square at the given position."""
        return self.spaces[position % self.size]

    def get_property(self, position: int) -> Optional[Property]:
        """Get a property, or None if the square is not a property."""
        space = self.get_space(position)
        return space if isinstance(space, Property) else None

    def place(self, position: int, square: Square) -> None:
        self.spaces[position] = square

    def is_empty(self, position: int) -> bool:
        return self.spaces[position] is None

    def fill_gaps(self) -> List[int]:
        """Put an ActionSquare on every empty position and return those positions."""
        filled = []
        for position, space in enumerate(self.spaces):
            if space is None:
                self.spaces[position] = ActionSquare(position)
                filled.append(position)
        return filled

    def properties(self) -> List[Property]:
        """Get all property squares in board order."""
        return [s for s in self.spaces if isinstance(s, Property)]

    def find_jail(self) -> Optional[int]:
        """Get the position of the first Jail square, if the board has one."""
        for position, space in enumerate(self.spaces):
            if isinstance(space, JailSquare):
                return position
        return None
