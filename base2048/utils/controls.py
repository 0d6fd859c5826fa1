"""
Translate keyboard and touch input into move directions.
"""

from base2048.addons.config import SWIPE_THRESHOLD
from base2048.core.gamemove import Direction

# ##>: Browser key names and WASD.
KEY_BINDINGS: dict[str, Direction] = {
    'ArrowUp': Direction.UP,
    'ArrowDown': Direction.DOWN,
    'ArrowLeft': Direction.LEFT,
    'ArrowRight': Direction.RIGHT,
    'w': Direction.UP,
    's': Direction.DOWN,
    'a': Direction.LEFT,
    'd': Direction.RIGHT,
    'W': Direction.UP,
    'S': Direction.DOWN,
    'A': Direction.LEFT,
    'D': Direction.RIGHT,
}


def key_to_direction(key: str) -> Direction | None:
    """
    Get the direction bound to a key.

    Parameters
    ----------
    key : str
        Name of the pressed key.

    Returns
    -------
    Direction or None
        The bound direction, or None for an unbound key.
    """
    return KEY_BINDINGS.get(key)


def swipe_to_direction(dx: float, dy: float, threshold: float = SWIPE_THRESHOLD) -> Direction | None:
    """
    Get the direction of a swipe gesture.

    Parameters
    ----------
    dx : float
        Horizontal displacement, positive to the right.
    dy : float
        Vertical displacement, positive downwards (screen coordinates).
    threshold : float, optional
        Displacement the dominant axis must exceed (default is 30).

    Returns
    -------
    Direction or None
        The swipe direction, or None when the gesture is too short.

    Notes
    -----
    The axis is horizontal only when ``|dx| > |dy|``; a tie counts as vertical.
    """
    if abs(dx) > abs(dy):
        if abs(dx) > threshold:
            return Direction.RIGHT if dx > 0 else Direction.LEFT
        return None

    if abs(dy) > threshold:
        return Direction.DOWN if dy > 0 else Direction.UP
    return None
