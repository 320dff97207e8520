"""
Game constants for the timed snake game.
"""

from enum import Enum


class Direction(str, Enum):
    """Movement directions. Values compare equal to their plain strings."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# (0, 0) is the bottom-left cell, so UP => y + 1
DIRECTION_DELTAS = {
    UP: (0, 1),
    DOWN: (0, -1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITE_DIRECTIONS = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Game settings
GRID_SIZE = 20
COUNTDOWN_TICKS = 10
START_POSITION = (5, 5)
START_DIRECTION = RIGHT
START_FOOD = (10, 10)

# Tick cadence used by the scheduler
MOVE_INTERVAL_SECONDS = 0.2
COUNTDOWN_INTERVAL_SECONDS = 1.0


def parse_direction(value) -> Direction:
    """
    Convert a direction-like value ("up", "UP", Direction.UP) to a Direction.

    Raises:
        ValueError: if the value does not name a direction
    """
    if isinstance(value, Direction):
        return value
    if isinstance(value, str):
        try:
            return Direction(value.strip().upper())
        except ValueError:
            pass
    raise ValueError(f"Unknown direction: {value!r}")
