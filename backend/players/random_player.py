"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain.constants import (
    DIRECTION_DELTAS,
    OPPOSITE_DIRECTIONS,
    VALID_MOVES,
    Direction,
)
from domain.snapshot import GameSnapshot
from .base import Player


class RandomPlayer(Player):
    """
    An autopilot that picks a direction avoiding walls, its own body and
    reversal. Prefers a move onto the food when one is available.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, snapshot: GameSnapshot) -> Direction:
        head_x, head_y = snapshot.head
        reverse = OPPOSITE_DIRECTIONS[snapshot.direction]

        # Filter out moves that:
        # 1. Reverse into the neck
        # 2. Hit walls
        # 3. Hit own body (tail included, it is still there when we check)
        valid_moves: List[Direction] = []
        for move in sorted(VALID_MOVES):
            if move == reverse:
                continue

            dx, dy = DIRECTION_DELTAS[move]
            new_x, new_y = head_x + dx, head_y + dy

            if not (0 <= new_x < snapshot.grid_size and 0 <= new_y < snapshot.grid_size):
                continue

            if (new_x, new_y) in snapshot.snake:
                continue

            if (new_x, new_y) == snapshot.food:
                return move

            valid_moves.append(move)

        # Trapped: keep going, we'll die anyway
        if not valid_moves:
            return snapshot.direction

        return self.rng.choice(valid_moves)
