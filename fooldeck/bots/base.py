"""
Base bot interface and utilities.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from fooldeck.common.card import Card
from fooldeck.durak.actions import Action
from fooldeck.durak.rules import card_sort_key
from fooldeck.durak.state import GameState


class BotStrategy(ABC):
    """
    Abstract base class for automated players.

    A strategy only proposes actions; the host applies them through the
    transition engine like any other player's move.
    """

    @abstractmethod
    def choose_action(self, state: GameState, player_index: int) -> Optional[Action]:
        """
        Choose an action for the seat at `player_index`.

        Args:
            state: Current game state
            player_index: Seat the strategy plays for

        Returns:
            Action to take, or None if the seat has nothing to do
        """
        pass

    def is_attacker(self, state: GameState, player_index: int) -> bool:
        return state.attacker == player_index

    def is_defender(self, state: GameState, player_index: int) -> bool:
        return state.defender == player_index

    def lowest(self, state: GameState, cards: List[Card]) -> Card:
        """Cheapest card by the hand presentation order."""
        return min(cards, key=lambda card: card_sort_key(card, state.trump_suit))
