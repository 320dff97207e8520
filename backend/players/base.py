"""
Base player interface for the game engine.
"""

from typing import Optional

from domain.snapshot import GameSnapshot


class Player:
    """
    Base class/interface for input sources.

    A player looks at the current snapshot and returns the direction it
    wants the snake to take next, or None to keep going straight.
    """

    def get_move(self, snapshot: GameSnapshot) -> Optional[str]:
        """
        Return a move direction given the current snapshot.

        Args:
            snapshot: Current state of the game

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT", or None
        """
        raise NotImplementedError
