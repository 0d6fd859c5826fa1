"""
Configuration of a 2048 game session.
"""

from dataclasses import dataclass, field

from base2048.core.gameboard import GRID_SIZE, TILE_SPAWN_PROBS, WINNING_TILE

# ##>: Minimal swipe displacement, in device-independent pixels.
SWIPE_THRESHOLD = 30


@dataclass
class GameConfig:
    """
    Rules of a game session.

    Attributes
    ----------
    size : int
        Side length of the square grid.
    target : int
        Tile value that counts as a win.
    start_tiles : int
        Number of tiles spawned when a new game starts.
    spawn_probs : dict[int, float]
        Probability of each spawned tile value.
    """

    size: int = GRID_SIZE
    target: int = WINNING_TILE
    start_tiles: int = 2
    spawn_probs: dict[int, float] = field(default_factory=lambda: dict(TILE_SPAWN_PROBS))

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be >= 2, got {self.size}')
        if self.start_tiles > self.size * self.size:
            raise ValueError(f'start_tiles must fit in the grid, got {self.start_tiles}')
        if abs(sum(self.spawn_probs.values()) - 1.0) > 1e-9:
            raise ValueError(f'spawn_probs must sum to 1, got {self.spawn_probs}')


def default_config() -> GameConfig:
    """Standard 4x4 game played up to 2048."""
    return GameConfig()
