# -*- coding: utf-8 -*-
"""
Grid engine and game session for the 2048 sliding-tile puzzle.
"""

from .core import Direction, MoveResult
from .envs import GameSession

__all__ = ["Direction", "MoveResult", "GameSession"]
