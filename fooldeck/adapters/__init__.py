"""
Platform adapters for the fooldeck session host.

This package provides adapters that translate between the game engine and the
places a game is shown (WebSocket viewers, tests).
"""

from fooldeck.adapters.base import PlatformAdapter
from fooldeck.adapters.dummy import DummyAdapter
from fooldeck.adapters.websocket import WebSocketAdapter

__all__ = ["PlatformAdapter", "DummyAdapter", "WebSocketAdapter"]
