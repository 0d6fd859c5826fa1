# -*- coding: utf-8 -*-
"""
Set of configurations for this project.
"""

from .config import SWIPE_THRESHOLD, GameConfig, default_config

__all__ = ["SWIPE_THRESHOLD", "GameConfig", "default_config"]
