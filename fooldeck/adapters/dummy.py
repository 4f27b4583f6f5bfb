"""
Dummy adapter for the fooldeck session host, used for testing and simulation.

This module provides a non-interactive adapter that records everything the
host sends it, so tests and simulations can inspect the game afterwards.
"""

from typing import List, Dict, Any, Tuple, Union
from enum import Enum

from fooldeck.adapters.base import PlatformAdapter


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for testing and simulation.

    This adapter doesn't talk to any real platform. It keeps rendered states,
    errors and events in lists for later inspection.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the dummy adapter.

        Args:
            verbose: Whether to print states and errors to stdout (useful for debugging)
        """
        self.verbose = verbose

        # Track rendered states for testing
        self.rendered_states: List[Dict[str, Any]] = []

        # Track rejections and events for later inspection
        self.errors: List[Tuple[str, str]] = []
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Store the game state for later inspection.

        Args:
            state: The current game state
        """
        self.rendered_states.append(state)

        if self.verbose:
            print("\n=== Game State ===")
            print(f"Trump: {state.get('trump_suit')}  Phase: {state.get('phase')}")
            for player in state.get("players", []):
                cards = " ".join(
                    f"{card['rank']}{card['suit']}" for card in player.get("hand", [])
                )
                print(f"{player.get('name')}: {cards}")
            print(f"Message: {state.get('message')}")
            print("==================\n")

    async def notify_error(self, player_id: str, message: str) -> None:
        self.errors.append((player_id, message))

        if self.verbose:
            print(f"Error for {player_id}: {message}")

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Store the event for later inspection.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        self.events.append((event_type_str, data))

        if self.verbose:
            print(f"Event: {event_type_str}")
            for key, value in data.items():
                print(f"  {key}: {value}")

    @property
    def last_state(self) -> Dict[str, Any]:
        """The most recently rendered state, or an empty dict."""
        return self.rendered_states[-1] if self.rendered_states else {}

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]

    def clear(self) -> None:
        """Clear all stored events, errors and states."""
        self.events.clear()
        self.errors.clear()
        self.rendered_states.clear()
