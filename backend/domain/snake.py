"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, Tuple


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
    """

    def __init__(self, positions: Iterable[Tuple[int, int]]):
        self.positions = deque(positions)

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    def occupies(self, position: Tuple[int, int]) -> bool:
        return position in self.positions

    def advance(self, new_head: Tuple[int, int], grow: bool = False) -> None:
        """Prepend new_head, dropping the tail unless the snake grows."""
        if not grow:
            self.positions.pop()
        self.positions.appendleft(new_head)

    def __len__(self) -> int:
        return len(self.positions)

    def __repr__(self):
        return f"<Snake head={self.head}, length={len(self.positions)}>"
