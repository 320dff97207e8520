"""
GameSnapshot - a read-only view of the game at a point in time.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class GameSnapshot:
    """
    A snapshot of the game handed to renderers and players.

    Attributes:
        snake: tuple of (x, y), head first
        food: (x, y) position of the food
        direction: current direction of travel
        score: food eaten this session
        is_over: whether the session has ended
        time_left: countdown ticks left before the session times out
        grid_size: board is grid_size x grid_size cells
        death_reason: 'wall', 'self', 'timeout' or None
        moves: movement ticks applied since the last reset
        game_number: counts resets, so each game has its own number
    """

    snake: Tuple[Tuple[int, int], ...]
    food: Tuple[int, int]
    direction: str
    score: int
    is_over: bool
    time_left: int
    grid_size: int
    death_reason: Optional[str] = None
    moves: int = 0
    game_number: int = 0

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake[0]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        S = snake body
        H = snake head
        (0,0) is at the bottom left and x-axis labels are at the bottom
        """
        board = [['.' for _ in range(self.grid_size)] for _ in range(self.grid_size)]

        fx, fy = self.food
        board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake):
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = []
        # Print rows in reverse order (bottom to top)
        for y in range(self.grid_size - 1, -1, -1):
            result.append(f"{y:2d} {' '.join(board[y])}")

        result.append("   " + " ".join(str(i % 10) for i in range(self.grid_size)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the snapshot to a dictionary for JSON serialization."""
        return {
            "snake": [{"x": x, "y": y} for x, y in self.snake],
            "food": {"x": self.food[0], "y": self.food[1]},
            "direction": str(getattr(self.direction, "value", self.direction)),
            "score": self.score,
            "is_over": self.is_over,
            "time_left": self.time_left,
            "grid_size": self.grid_size,
            "death_reason": self.death_reason,
            "moves": self.moves,
            "game_number": self.game_number,
        }

    def __repr__(self):
        return (
            f"<GameSnapshot moves={self.moves}, head={self.head}, food={self.food}, "
            f"score={self.score}, time_left={self.time_left}, over={self.is_over}>"
        )
