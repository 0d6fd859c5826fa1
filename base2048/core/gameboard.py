"""
Grid engine of the 2048 game: grid creation, tile spawning, moves and terminal conditions.

Grids are treated as values. Every operation that changes a grid returns a new array; a call
that changes nothing hands back the caller's grid untouched.
"""

from typing import NamedTuple

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array_equal, asarray, int64, ndarray, zeros, zeros_like
from numpy.random import PCG64DXSM, Generator, default_rng

from base2048.core.gamemove import Direction, rotate, unrotate

# ##>: Board side length.
GRID_SIZE = 4

# ##>: Tile value that counts as a win.
WINNING_TILE = 2048

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Module-level generator, used when the caller injects no random source.
_GENERATOR = default_rng(PCG64DXSM())


class MoveResult(NamedTuple):
    """
    Outcome of one move attempt.

    Attributes
    ----------
    grid : ndarray
        The grid after the move.
    score : int
        Sum of the tiles created by merges during the move.
    moved : bool
        Whether the grid changed.
    """

    grid: ndarray
    score: int
    moved: bool


def _generator(rng: Generator | None, seed: int | None) -> Generator:
    if rng is not None:
        return rng
    return default_rng(seed) if seed is not None else _GENERATOR


def create_empty_grid(size: int = GRID_SIZE) -> ndarray:
    """
    Create a grid with no tile.

    Parameters
    ----------
    size : int, optional
        Side length of the square grid (default is 4).

    Returns
    -------
    ndarray
        A (size, size) grid filled with zeros.
    """
    return zeros((size, size), dtype=int64)


def spawn_random_tile(
    grid: ndarray,
    rng: Generator | None = None,
    seed: int | None = None,
    probs: dict[int, float] | None = None,
) -> ndarray:
    """
    Place one new tile in a random empty cell.

    Parameters
    ----------
    grid : ndarray
        The current grid. Never modified.
    rng : Generator, optional
        Random source. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a fresh generator, for reproducibility.
    probs : dict[int, float], optional
        Probability of each spawned value (default is ``TILE_SPAWN_PROBS``).

    Returns
    -------
    ndarray
        A new grid with one more tile, or ``grid`` itself when there is no empty cell.

    Notes
    -----
    - The empty cell is chosen uniformly among all empty cells.
    - A new tile has a 90% chance of being 2 and a 10% chance of being 4.
    """
    empty_cells = argwhere(grid == 0)
    if len(empty_cells) == 0:
        return grid

    generator = _generator(rng, seed)
    probs = probs or TILE_SPAWN_PROBS

    # ##: Choose the cell, then the value.
    row, col = empty_cells[generator.integers(len(empty_cells))]
    value = generator.choice(list(probs), p=list(probs.values()))

    new_grid = grid.copy()
    new_grid[row, col] = value
    return new_grid


def initial_grid(
    size: int = GRID_SIZE,
    number_tile: int = 2,
    rng: Generator | None = None,
    seed: int | None = None,
    probs: dict[int, float] | None = None,
) -> ndarray:
    """
    Create the grid of a new game: an empty grid with ``number_tile`` spawned tiles.

    Parameters
    ----------
    size : int, optional
        Side length of the grid (default is 4).
    number_tile : int, optional
        Number of tiles to spawn (default is 2).
    rng : Generator, optional
        Random source. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a fresh generator.
    probs : dict[int, float], optional
        Probability of each spawned value.

    Returns
    -------
    ndarray
        The starting grid.
    """
    generator = _generator(rng, seed)
    grid = create_empty_grid(size)
    for _ in range(number_tile):
        grid = spawn_random_tile(grid, rng=generator, probs=probs)
    return grid


def merge_row(row: ndarray) -> tuple[int, ndarray]:
    """
    Slide one row to the left and merge adjacent equal tiles.

    Parameters
    ----------
    row : ndarray
        A 1D array representing one row of the grid.

    Returns
    -------
    score : int
        Sum of the tiles created by merges.
    merged_row : ndarray
        The row after the slide, padded on the right with zeros.

    Notes
    -----
    - Zeros are dropped before merging, keeping the order of the tiles.
    - The scan goes left to right and skips past a merged tile, so a tile takes part in
      at most one merge: [2, 2, 2, 0] gives [4, 2, 0, 0].
    """
    tiles = row[row != 0]
    merged_row = zeros_like(row)
    score = 0

    index, position = 0, 0
    while index < len(tiles):
        value = tiles[index]
        if index + 1 < len(tiles) and tiles[index + 1] == value:
            value = value * 2
            score += int(value)
            index += 2
        else:
            index += 1
        merged_row[position] = value
        position += 1

    return score, merged_row


def slide_and_merge(grid: ndarray) -> tuple[int, ndarray]:
    """
    Slide every row of the grid to the left.

    Parameters
    ----------
    grid : ndarray
        The grid in canonical orientation.

    Returns
    -------
    score : int
        Total score of all merges.
    updated_grid : ndarray
        A new grid after sliding and merging.
    """
    updated_grid = zeros_like(grid)
    score = 0

    for i, row in enumerate(grid):
        row_score, updated_grid[i] = merge_row(row)
        score += row_score

    return score, updated_grid


def move(grid: ndarray, direction: Direction) -> MoveResult:
    """
    Slide all tiles of the grid in a direction.

    Parameters
    ----------
    grid : ndarray
        The current grid. Never modified.
    direction : Direction
        Direction of the move.

    Returns
    -------
    MoveResult
        The new grid, the score gained and whether the grid changed.

    Notes
    -----
    - The grid is rotated so that the move becomes a left slide, then rotated back.
    - A move that changes nothing returns ``grid`` itself with a score of 0 and ``moved`` False.
    """
    score, updated = slide_and_merge(rotate(grid, direction))
    new_grid = unrotate(updated, direction).copy()

    if array_equal(new_grid, grid):
        return MoveResult(grid, 0, False)
    return MoveResult(new_grid, score, True)


def is_board_full(grid: ndarray) -> bool:
    """Check that no cell is empty."""
    return bool(np_all(grid != 0))


def has_stalemate(grid: ndarray) -> bool:
    """
    Check if the game is over.

    Parameters
    ----------
    grid : ndarray
        The current grid.

    Returns
    -------
    bool
        True if the grid is full and no two adjacent cells hold the same value.
    """
    if not is_board_full(grid):
        return False
    return not (np_any(grid[:-1] == grid[1:]) or np_any(grid[:, :-1] == grid[:, 1:]))


def has_reached_target(grid: ndarray, target: int = WINNING_TILE) -> bool:
    """
    Check if any tile reached the target value.

    Parameters
    ----------
    grid : ndarray
        The current grid.
    target : int, optional
        The winning tile value (default is 2048).

    Returns
    -------
    bool
        True if a cell holds ``target`` or more.
    """
    return bool(np_any(grid >= target))


def is_valid_grid(grid, size: int | None = None) -> bool:
    """
    Check the structure of a grid coming from outside the engine.

    Parameters
    ----------
    grid : array_like
        Candidate grid.
    size : int, optional
        Expected side length. Any square size is accepted when None.

    Returns
    -------
    bool
        True if the grid is a square integer matrix whose tiles are powers of two of at least 2.
    """
    try:
        candidate = asarray(grid)
    except ValueError:
        return False

    if candidate.ndim != 2 or candidate.shape[0] != candidate.shape[1] or candidate.dtype.kind not in 'iu':
        return False
    if size is not None and candidate.shape[0] != size:
        return False

    tiles = candidate[candidate != 0]
    return bool(np_all(tiles >= 2) and np_all((tiles & (tiles - 1)) == 0))
