"""
Session hosts for the fooldeck rules engine.

This package provides the hosts that own a game, feed actions into the
transition engine and push the results to a platform adapter.
"""

from fooldeck.engine.base import GameEngine
from fooldeck.engine.durak import DurakEngine

__all__ = ["GameEngine", "DurakEngine"]
