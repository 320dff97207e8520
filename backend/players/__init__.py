"""
Input sources for the timed snake game.

Players pick directions from snapshots; the gesture helpers turn raw key
presses and drags into directions.
"""

from .base import Player
from .random_player import RandomPlayer
from .gestures import direction_from_drag, direction_from_key, KEY_BINDINGS

__all__ = [
    'Player',
    'RandomPlayer',
    'direction_from_drag',
    'direction_from_key',
    'KEY_BINDINGS',
]
