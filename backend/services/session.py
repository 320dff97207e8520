"""
GameSession - the application layer around one GameState.

Wires a GameState to a HighScoreStore and, optionally, a TickScheduler.
The session watches for the Active -> Over transition and records the
final score exactly once per game.
"""

import logging
import threading
from typing import Optional

from domain.constants import COUNTDOWN_INTERVAL_SECONDS, MOVE_INTERVAL_SECONDS
from domain.game_state import GameState
from domain.snapshot import GameSnapshot
from .high_score_store import HighScoreStore
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)


class GameSession:
    """Drives one game and keeps the best score up to date."""

    def __init__(
        self,
        game: Optional[GameState] = None,
        store: Optional[HighScoreStore] = None,
    ):
        self.game = game or GameState()
        self.store = store or HighScoreStore()
        self.scheduler: Optional[TickScheduler] = None
        self.games_played = 0
        self._recorded_games = set()
        self._record_lock = threading.Lock()
        self.high_score = self.store.get()

    def move(self) -> GameSnapshot:
        self.game.tick_move()
        return self._after_tick()

    def countdown(self) -> GameSnapshot:
        self.game.tick_countdown()
        return self._after_tick()

    def change_direction(self, direction) -> None:
        self.game.request_direction_change(direction)

    def restart(self) -> GameSnapshot:
        """Reset the game; the new game is recorded under its own game number."""
        self.game.reset()
        logger.info("New game started (best score %s)", self.high_score)
        return self.game.snapshot()

    def snapshot(self) -> GameSnapshot:
        return self.game.snapshot()

    def start(
        self,
        move_interval: float = MOVE_INTERVAL_SECONDS,
        countdown_interval: float = COUNTDOWN_INTERVAL_SECONDS,
    ) -> TickScheduler:
        """Start real-time ticking on a background scheduler."""
        if self.scheduler is None:
            self.scheduler = TickScheduler(
                self.game,
                move_interval=move_interval,
                countdown_interval=countdown_interval,
                on_tick=self._on_scheduled_tick,
            )
        self.scheduler.start()
        return self.scheduler

    def stop(self) -> None:
        if self.scheduler is not None:
            self.scheduler.stop()

    def _on_scheduled_tick(self, kind: str) -> None:
        self._after_tick()

    def _after_tick(self) -> GameSnapshot:
        snapshot = self.game.snapshot()
        if snapshot.is_over:
            self._record_result(snapshot)
        return snapshot

    def _record_result(self, snapshot: GameSnapshot) -> None:
        with self._record_lock:
            # One record per game number
            if snapshot.game_number in self._recorded_games:
                return
            self._recorded_games.add(snapshot.game_number)
            self.games_played += 1
            self.high_score = self.store.record(snapshot.score)

        logger.info(
            "Game finished: score=%s reason=%s best=%s",
            snapshot.score,
            snapshot.death_reason,
            self.high_score,
        )
