"""
GameState - the simulation of one timed snake session.

All mutation goes through four operations: a direction-change request, the
movement tick, the countdown tick and reset. Each of them runs under the
same lock, so a scheduler thread and an input thread can share one state.
"""

import logging
import random
import threading
from typing import Iterable, Optional, Tuple

from .constants import (
    COUNTDOWN_TICKS,
    DIRECTION_DELTAS,
    GRID_SIZE,
    OPPOSITE_DIRECTIONS,
    START_DIRECTION,
    START_FOOD,
    START_POSITION,
    Direction,
    parse_direction,
)
from .snake import Snake
from .snapshot import GameSnapshot

logger = logging.getLogger(__name__)


class GameState:
    """
    Manages:
      - Board (grid_size x grid_size)
      - Snake body and direction
      - Food
      - Score
      - Countdown and game over
    """

    def __init__(self, grid_size: int = GRID_SIZE, rng: Optional[random.Random] = None):
        if grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {grid_size}.")
        min_size = max(START_POSITION + START_FOOD) + 1
        if grid_size < min_size:
            raise ValueError(
                f"grid_size must be at least {min_size} to fit the starting snake and food, got {grid_size}."
            )

        self.grid_size = grid_size
        self.rng = rng or random.Random()
        self._lock = threading.RLock()

        self.snake = Snake([START_POSITION])
        self.direction: Direction = START_DIRECTION
        self.food: Tuple[int, int] = START_FOOD
        self.score = 0
        self.is_over = False
        self.time_left = COUNTDOWN_TICKS
        self.death_reason: Optional[str] = None
        self.moves = 0
        self.game_number = 0

        self.reset()

    def reset(self) -> None:
        """Put every field back to its starting value and reactivate the session."""
        with self._lock:
            self.snake = Snake([START_POSITION])
            self.direction = START_DIRECTION
            self.food = START_FOOD
            self.score = 0
            self.is_over = False
            self.time_left = COUNTDOWN_TICKS
            self.death_reason = None
            self.moves = 0
            self.game_number += 1

    def request_direction_change(self, new_direction) -> None:
        """
        Turn the snake, unless the game is over or new_direction would reverse
        it straight back into its own neck. Invalid requests are ignored.
        """
        try:
            new_direction = parse_direction(new_direction)
        except ValueError:
            logger.debug("Ignoring unknown direction %r", new_direction)
            return

        with self._lock:
            if self.is_over:
                return
            if new_direction == OPPOSITE_DIRECTIONS[self.direction]:
                return
            self.direction = new_direction

    def tick_move(self) -> None:
        """
        Advance the snake one cell in the current direction.

        Hitting a wall or any body cell (tail included, as it has not moved
        yet) ends the game and leaves everything else untouched. Landing on
        the food grows the snake, scores a point, refills the countdown and
        moves the food.
        """
        with self._lock:
            if self.is_over:
                return

            dx, dy = DIRECTION_DELTAS[self.direction]
            hx, hy = self.snake.head
            new_head = (hx + dx, hy + dy)

            if not self.in_bounds(new_head):
                self._end_game("wall")
                return

            if self.snake.occupies(new_head):
                self._end_game("self")
                return

            eats_food = new_head == self.food
            self.snake.advance(new_head, grow=eats_food)
            self.moves += 1

            if eats_food:
                self.score += 1
                self.time_left = COUNTDOWN_TICKS
                self.place_food()

    def tick_countdown(self) -> None:
        """Count one tick down; a tick with nothing left ends the game."""
        with self._lock:
            if self.is_over:
                return

            if self.time_left > 0:
                self.time_left -= 1
            else:
                self._end_game("timeout")

    def place_food(self) -> Tuple[int, int]:
        """
        Move the food to a random cell not occupied by the snake.
        Assumes at least one free cell exists.
        """
        with self._lock:
            while True:
                x = self.rng.randint(0, self.grid_size - 1)
                y = self.rng.randint(0, self.grid_size - 1)
                if not self.snake.occupies((x, y)):
                    self.food = (x, y)
                    return self.food

    def set_food(self, position: Tuple[int, int]) -> None:
        """
        Place the food at a specific cell.

        Raises:
            ValueError: if the cell is off the board or under the snake
        """
        position = tuple(position)
        if not self.in_bounds(position):
            raise ValueError(f"Food out of bounds at {position}.")

        with self._lock:
            if self.snake.occupies(position):
                raise ValueError(f"Food cannot be placed on the snake at {position}.")
            self.food = position

    def set_snake(self, positions: Iterable[Tuple[int, int]], direction=None) -> None:
        """
        Replace the snake body (head first) and optionally its direction.

        Raises:
            ValueError: for an empty body, off-board or repeated cells, or a
                body covering the food
        """
        body = [tuple(p) for p in positions]
        if not body:
            raise ValueError("Snake must have at least one segment.")
        for cell in body:
            if not self.in_bounds(cell):
                raise ValueError(f"Snake segment out of bounds at {cell}.")
        if len(set(body)) != len(body):
            raise ValueError(f"Snake segments must be distinct: {body}.")

        with self._lock:
            if self.food in body:
                raise ValueError(f"Snake covers the food at {self.food}.")
            self.snake = Snake(body)
            if direction is not None:
                self.direction = parse_direction(direction)

    def in_bounds(self, position: Tuple[int, int]) -> bool:
        x, y = position
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def snapshot(self) -> GameSnapshot:
        """
        Return a snapshot of the current board as a GameSnapshot.
        """
        with self._lock:
            return GameSnapshot(
                snake=tuple(self.snake.positions),
                food=self.food,
                direction=self.direction,
                score=self.score,
                is_over=self.is_over,
                time_left=self.time_left,
                grid_size=self.grid_size,
                death_reason=self.death_reason,
                moves=self.moves,
                game_number=self.game_number,
            )

    def _end_game(self, reason: str) -> None:
        self.is_over = True
        self.death_reason = reason
        logger.info(
            "Game over (%s) after %s moves with score %s", reason, self.moves, self.score
        )

    def __repr__(self):
        return (
            f"<GameState head={self.snake.head}, length={len(self.snake)}, "
            f"food={self.food}, score={self.score}, time_left={self.time_left}, "
            f"over={self.is_over}>"
        )
