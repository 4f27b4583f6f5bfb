"""
Card primitives shared by the game modules.
"""

from fooldeck.common.card import Card, Rank, Suit
from fooldeck.common.deck import build_deck, shuffle

__all__ = ["Card", "Rank", "Suit", "build_deck", "shuffle"]
