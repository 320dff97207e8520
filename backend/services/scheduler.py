"""
Tick scheduler driving a GameState.

Two periodic jobs run on a private `schedule.Scheduler`:
 - the movement tick (default every 0.2 seconds)
 - the countdown tick (default every 1 second)

Jobs run one after another on a single worker thread, and every GameState
operation takes the state's lock, so ticks never interleave with each other
or with direction changes coming from input threads.
"""

import logging
import threading
from typing import Callable, Optional

import schedule

from domain.constants import COUNTDOWN_INTERVAL_SECONDS, MOVE_INTERVAL_SECONDS
from domain.game_state import GameState

logger = logging.getLogger(__name__)

SCHEDULER_LOOP_SLEEP_SECONDS = 0.02

MOVE_TICK = "move"
COUNTDOWN_TICK = "countdown"


class TickScheduler:
    """Runs the movement and countdown ticks of one game on fixed periods."""

    def __init__(
        self,
        game: GameState,
        move_interval: float = MOVE_INTERVAL_SECONDS,
        countdown_interval: float = COUNTDOWN_INTERVAL_SECONDS,
        on_tick: Optional[Callable[[str], None]] = None,
        poll_seconds: float = SCHEDULER_LOOP_SLEEP_SECONDS,
    ):
        if move_interval <= 0 or countdown_interval <= 0:
            raise ValueError("Tick intervals must be positive.")

        self.game = game
        self.move_interval = move_interval
        self.countdown_interval = countdown_interval
        self.on_tick = on_tick
        self.poll_seconds = poll_seconds

        self.scheduler = schedule.Scheduler()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._register_jobs()

    def _register_jobs(self) -> None:
        self.scheduler.clear()
        self.scheduler.every(self.move_interval).seconds.do(self._tick, MOVE_TICK).tag(MOVE_TICK)
        self.scheduler.every(self.countdown_interval).seconds.do(
            self._tick, COUNTDOWN_TICK
        ).tag(COUNTDOWN_TICK)

    def _tick(self, kind: str) -> None:
        if kind == MOVE_TICK:
            self.game.tick_move()
        else:
            self.game.tick_countdown()

        if self.on_tick is not None:
            self.on_tick(kind)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_pending(self) -> None:
        """Run every job whose period has elapsed."""
        self.scheduler.run_pending()

    def run_all(self) -> None:
        """Run both jobs once right now, movement first."""
        self.scheduler.run_all(delay_seconds=0)

    def start(self) -> None:
        """Start ticking on a background daemon thread."""
        if self.running:
            return

        if not self.scheduler.get_jobs():
            self._register_jobs()

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="tick-scheduler", daemon=True)
        self._thread.start()
        logger.info(
            "Tick scheduler started (move every %ss, countdown every %ss)",
            self.move_interval,
            self.countdown_interval,
        )

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        """Stop ticking. Safe to call at any time, including more than once."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        self.scheduler.clear()
        logger.info("Tick scheduler stopped")

    def _loop(self) -> None:
        while not self._stop_event.wait(self.poll_seconds):
            try:
                self.run_pending()
            except Exception:
                logger.exception("Tick failed; stopping scheduler")
                self._stop_event.set()
                raise
