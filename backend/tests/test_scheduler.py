"""
Tests for services/scheduler.py.
"""

import pytest
import random
import sys
import os
import time

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import GameState, COUNTDOWN_TICKS
from services.scheduler import TickScheduler, MOVE_TICK, COUNTDOWN_TICK


@pytest.fixture
def game():
    return GameState(rng=random.Random(0))


class TestTickScheduler:
    """Tests for the TickScheduler class."""

    def test_registers_two_jobs(self, game):
        scheduler = TickScheduler(game)

        jobs = scheduler.scheduler.get_jobs()

        assert len(jobs) == 2
        assert scheduler.scheduler.get_jobs(MOVE_TICK)
        assert scheduler.scheduler.get_jobs(COUNTDOWN_TICK)

    def test_run_all_moves_then_counts_down(self, game):
        ticks = []
        scheduler = TickScheduler(game, on_tick=ticks.append)

        scheduler.run_all()

        assert ticks == [MOVE_TICK, COUNTDOWN_TICK]
        assert game.snake.head == (6, 5)
        assert game.time_left == COUNTDOWN_TICKS - 1

    def test_nothing_due_right_after_creation(self, game):
        scheduler = TickScheduler(game, move_interval=60, countdown_interval=60)

        scheduler.run_pending()

        assert game.moves == 0
        assert game.time_left == COUNTDOWN_TICKS

    @pytest.mark.parametrize("move_interval,countdown_interval", [(0, 1), (0.2, -1)])
    def test_invalid_intervals_raise(self, game, move_interval, countdown_interval):
        with pytest.raises(ValueError):
            TickScheduler(game, move_interval=move_interval, countdown_interval=countdown_interval)

    def test_start_and_stop_in_background(self, game):
        scheduler = TickScheduler(game, move_interval=0.01, countdown_interval=0.05, poll_seconds=0.005)

        scheduler.start()
        assert scheduler.running is True
        deadline = time.time() + 2.0
        while game.moves == 0 and not game.is_over and time.time() < deadline:
            time.sleep(0.01)
        scheduler.stop()

        assert scheduler.running is False
        assert game.moves > 0 or game.is_over

        frozen = game.snapshot()
        time.sleep(0.05)
        assert game.snapshot() == frozen

    def test_stop_is_idempotent(self, game):
        scheduler = TickScheduler(game)

        scheduler.stop()
        scheduler.stop()

        assert scheduler.running is False

    def test_restart_after_stop(self, game):
        scheduler = TickScheduler(game, move_interval=60, countdown_interval=60)

        scheduler.start()
        scheduler.stop()
        assert scheduler.scheduler.get_jobs() == []

        scheduler.start()
        assert len(scheduler.scheduler.get_jobs()) == 2
        scheduler.stop()
