"""
Domain entities for the timed snake game.

This module contains the core game entities that are independent of
infrastructure concerns (scheduling, storage, rendering, HTTP).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES,
    Direction, GRID_SIZE, COUNTDOWN_TICKS, parse_direction,
)
from .snake import Snake
from .snapshot import GameSnapshot
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'Direction', 'GRID_SIZE', 'COUNTDOWN_TICKS', 'parse_direction',
    'Snake',
    'GameSnapshot',
    'GameState',
]
