"""
Tests for input sources: the autopilot player and the gesture helpers.
"""

import pytest
import random
import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import GameSnapshot, UP, DOWN, LEFT, RIGHT, VALID_MOVES
from players import Player, RandomPlayer, direction_from_drag, direction_from_key


def make_snapshot(snake, direction=RIGHT, food=(15, 15), grid_size=20):
    return GameSnapshot(
        snake=tuple(snake),
        food=food,
        direction=direction,
        score=0,
        is_over=False,
        time_left=10,
        grid_size=grid_size,
    )


class TestPlayer:
    def test_base_player_is_abstract(self):
        with pytest.raises(NotImplementedError):
            Player().get_move(make_snapshot([(5, 5)]))


class TestRandomPlayer:
    """Tests for the RandomPlayer class."""

    def test_returns_valid_move(self):
        player = RandomPlayer(rng=random.Random(0))
        move = player.get_move(make_snapshot([(5, 5)]))
        assert move in VALID_MOVES

    def test_never_reverses(self):
        player = RandomPlayer(rng=random.Random(1))
        snapshot = make_snapshot([(5, 5), (4, 5)], direction=RIGHT)

        for _ in range(30):
            assert player.get_move(snapshot) != LEFT

    def test_avoids_walls_when_possible(self):
        """In the bottom-left corner heading left, only UP is safe."""
        player = RandomPlayer(rng=random.Random(2))
        snapshot = make_snapshot([(0, 0)], direction=LEFT)

        for _ in range(20):
            assert player.get_move(snapshot) == UP

    def test_avoids_own_body(self):
        player = RandomPlayer(rng=random.Random(3))
        # Heading down with the body wrapped around the left side of the head
        snapshot = make_snapshot([(5, 5), (5, 6), (4, 6), (4, 5), (4, 4)], direction=DOWN)

        for _ in range(20):
            assert player.get_move(snapshot) in {DOWN, RIGHT}

    def test_goes_for_adjacent_food(self):
        player = RandomPlayer(rng=random.Random(4))
        snapshot = make_snapshot([(5, 5)], direction=RIGHT, food=(5, 6))

        assert player.get_move(snapshot) == UP

    def test_trapped_keeps_direction(self):
        """With no safe move the player keeps going."""
        player = RandomPlayer(rng=random.Random(5))
        snapshot = make_snapshot([(0, 0), (1, 0), (1, 1), (0, 1)], direction=LEFT)

        assert player.get_move(snapshot) == LEFT


class TestDirectionFromDrag:
    """Tests for dominant-axis drag mapping."""

    @pytest.mark.parametrize("dx,dy,expected", [
        (30, 4, RIGHT),
        (-30, 4, LEFT),
        (4, -30, UP),
        (4, 30, DOWN),
        (-12, -11, LEFT),
        (10, 10, DOWN),
    ])
    def test_dominant_axis_wins(self, dx, dy, expected):
        assert direction_from_drag(dx, dy) == expected

    def test_zero_drag_is_ignored(self):
        assert direction_from_drag(0, 0) is None

    def test_short_drag_is_ignored(self):
        assert direction_from_drag(5, 1, min_distance=10) is None
        assert direction_from_drag(1, -5, min_distance=10) is None
        assert direction_from_drag(10, 1, min_distance=10) == RIGHT


class TestDirectionFromKey:
    """Tests for key bindings."""

    @pytest.mark.parametrize("key,expected", [
        ("w", UP),
        ("S", DOWN),
        ("a", LEFT),
        ("d", RIGHT),
        ("ArrowUp", UP),
        ("ArrowLeft", LEFT),
        ("KEY_RIGHT", RIGHT),
        ("j", DOWN),
    ])
    def test_known_keys(self, key, expected):
        assert direction_from_key(key) == expected

    @pytest.mark.parametrize("key", ["x", "", "Enter"])
    def test_unknown_keys(self, key):
        assert direction_from_key(key) is None
