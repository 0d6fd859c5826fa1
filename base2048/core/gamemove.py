"""
Move directions for the 2048 grid engine, with rotation canonicalization and legal move detection.
"""

from enum import IntEnum

from numpy import ndarray, rot90


class Direction(IntEnum):
    """
    Direction of a move.

    The value of each member is the number of counter-clockwise quarter turns that brings the
    direction onto LEFT, so every move can be computed as a left slide on a rotated grid.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @classmethod
    def from_name(cls, name: str) -> 'Direction':
        """
        Get a direction from its name, case insensitive.

        Parameters
        ----------
        name : str
            Name of the direction ('left', 'UP', ...).

        Returns
        -------
        Direction
            The matching direction.

        Raises
        ------
        ValueError
            If the name is not a direction.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError as error:
            raise ValueError(f'Unknown direction: {name!r}') from error


def rotate(grid: ndarray, direction: Direction) -> ndarray:
    """
    Rotate the grid so that a move in ``direction`` becomes a left move.

    Parameters
    ----------
    grid : ndarray
        The game grid.
    direction : Direction
        Direction of the move.

    Returns
    -------
    ndarray
        A rotated view of the grid.
    """
    return rot90(grid, k=int(direction))


def unrotate(grid: ndarray, direction: Direction) -> ndarray:
    """
    Undo ``rotate`` for the same direction.

    Parameters
    ----------
    grid : ndarray
        A grid in canonical (left move) orientation.
    direction : Direction
        Direction of the move.

    Returns
    -------
    ndarray
        A view of the grid in its original orientation.
    """
    return rot90(grid, k=-int(direction))


def legal_directions_mask(grid: ndarray) -> tuple[bool, bool, bool, bool]:
    """
    Get a boolean mask of the four directions in a single pass.

    Parameters
    ----------
    grid : ndarray
        The game grid.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        Mask for (left, up, right, down), indexed by ``Direction``. True means the move changes the grid.
    """
    # ##>: Horizontal adjacency serves both left and right.
    left_cols, right_cols = grid[:, :-1], grid[:, 1:]
    h_can_merge = (left_cols != 0) & (left_cols == right_cols)

    # ##>: Vertical adjacency serves both up and down.
    top_rows, bottom_rows = grid[:-1, :], grid[1:, :]
    v_can_merge = (top_rows != 0) & (top_rows == bottom_rows)

    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return (
        bool(left.any() or h_can_merge.any()),
        bool(up.any() or v_can_merge.any()),
        bool(right.any() or h_can_merge.any()),
        bool(down.any() or v_can_merge.any()),
    )


def legal_directions(grid: ndarray) -> list[Direction]:
    """
    Directions that would change the grid.

    Parameters
    ----------
    grid : ndarray
        The game grid.

    Returns
    -------
    list[Direction]
        Effective directions, in ``Direction`` order.
    """
    mask = legal_directions_mask(grid)
    return [direction for direction in Direction if mask[direction]]


def illegal_directions(grid: ndarray) -> list[Direction]:
    """Directions that would leave the grid unchanged."""
    mask = legal_directions_mask(grid)
    return [direction for direction in Direction if not mask[direction]]
