# -*- coding: utf-8 -*-
"""
This module provides utilities around the grid engine: input translation and text rendering.
"""

from .controls import KEY_BINDINGS, key_to_direction, swipe_to_direction
from .render import render_grid

__all__ = ["KEY_BINDINGS", "key_to_direction", "swipe_to_direction", "render_grid"]
