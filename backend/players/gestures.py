"""
Translate raw input (keys, drag gestures) into direction-change requests.
"""

from typing import Optional

from domain.constants import UP, DOWN, LEFT, RIGHT, Direction


KEY_BINDINGS = {
    # Arrow keys (curses / browser KeyboardEvent names)
    "ARROWUP": UP, "ARROWDOWN": DOWN, "ARROWLEFT": LEFT, "ARROWRIGHT": RIGHT,
    "KEY_UP": UP, "KEY_DOWN": DOWN, "KEY_LEFT": LEFT, "KEY_RIGHT": RIGHT,
    # WASD
    "W": UP, "S": DOWN, "A": LEFT, "D": RIGHT,
    # vi keys
    "K": UP, "J": DOWN, "H": LEFT, "L": RIGHT,
}


def direction_from_key(key: str) -> Optional[Direction]:
    """Map a key name to a direction. Unknown keys return None."""
    if not key:
        return None
    return KEY_BINDINGS.get(key.strip().upper())


def direction_from_drag(dx: float, dy: float, min_distance: float = 0) -> Optional[Direction]:
    """
    Map a drag gesture to a direction using its dominant axis.

    dx and dy are in screen space, where y grows downward, so a drag toward
    the bottom of the screen means DOWN. Ties go to the vertical axis.

    Args:
        dx: horizontal translation of the drag
        dy: vertical translation of the drag
        min_distance: drags shorter than this along the dominant axis are ignored

    Returns:
        The direction, or None for a drag too short to count
    """
    if abs(dx) > abs(dy):
        if abs(dx) < min_distance:
            return None
        return RIGHT if dx > 0 else LEFT

    if dy == 0 or abs(dy) < min_distance:
        return None
    return DOWN if dy > 0 else UP
