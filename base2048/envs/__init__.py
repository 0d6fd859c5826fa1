# -*- coding: utf-8 -*-
"""
Python implementation of a 2048 game session.

This module provides the `GameSession` class, which holds the grid, the scores and the terminal flags of one game.
"""

from .session import GameSession

__all__ = ["GameSession"]
