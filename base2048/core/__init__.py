# -*- coding: utf-8 -*-
"""
Grid engine of the 2048 game.

It includes functions for creating grids, spawning tiles, sliding and merging in the four directions,
and detecting the win and stalemate conditions.
"""

from .gameboard import (
    GRID_SIZE,
    TILE_SPAWN_PROBS,
    WINNING_TILE,
    MoveResult,
    create_empty_grid,
    has_reached_target,
    has_stalemate,
    initial_grid,
    is_board_full,
    is_valid_grid,
    merge_row,
    move,
    slide_and_merge,
    spawn_random_tile,
)
from .gamemove import Direction, illegal_directions, legal_directions, legal_directions_mask

__all__ = [
    "GRID_SIZE",
    "TILE_SPAWN_PROBS",
    "WINNING_TILE",
    "Direction",
    "MoveResult",
    "create_empty_grid",
    "spawn_random_tile",
    "initial_grid",
    "merge_row",
    "slide_and_merge",
    "move",
    "is_board_full",
    "has_stalemate",
    "has_reached_target",
    "is_valid_grid",
    "legal_directions_mask",
    "legal_directions",
    "illegal_directions",
]
