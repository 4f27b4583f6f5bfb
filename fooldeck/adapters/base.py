"""
Base adapter interface for the fooldeck session host.

This module defines the interface that platform-specific adapters must implement
to show a game to its viewers.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union
from enum import Enum


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    This abstract class defines the methods that platform-specific adapters
    must implement to interact with the session host. These methods handle
    rendering the game state, reporting rejected actions, and notifying of
    game events.

    Implementations of this interface bridge the gap between the platform-agnostic
    game engine and specific platforms like a terminal or a WebSocket relay.
    """

    @abstractmethod
    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Show the current game state to every viewer.

        Args:
            state: Serialized game state, as produced by GameState.to_dict()
        """
        pass

    @abstractmethod
    async def notify_error(self, player_id: str, message: str) -> None:
        """
        Tell the acting player why their action was refused.

        Args:
            player_id: The player whose action was rejected
            message: Human-readable rejection reason
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    # The following methods have default implementations but can be overridden

    async def initialize(self) -> None:
        """
        Initialize the adapter.

        This method is called when the adapter is first connected to the engine.
        It can be used to set up resources, connections, etc.
        """
        pass

    async def shutdown(self) -> None:
        """
        Shutdown the adapter.

        This method is called when the engine is shutting down. It can be used
        to clean up resources, close connections, etc.
        """
        pass
