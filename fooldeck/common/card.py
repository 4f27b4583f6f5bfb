"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of the deck: Spades, Hearts,
Diamonds and Clubs. The declaration order is the deck enumeration order.

- `Rank`: An enum representing the nine ranks of the 36-card Durak deck: Six
through Ten, Jack, Queen, King, and Ace.

- `Card`: An immutable value representing a playing card. A card has a suit
and a rank; two cards are equal when both match.

This module is part of the `fooldeck` package.
"""

from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Dict


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a 36-card deck, lowest first.
    """

    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def rank_str(self) -> str:
        """A string representation of the rank."""
        return self.value

    def __str__(self) -> str:
        return self.rank_str


@dataclass(frozen=True)
class Card:
    """
    Immutable playing card.

    >>> card = Card(Suit.HEARTS, Rank.TEN)
    >>> print(card)
    10 of ♥
    >>> card.to_dict()
    {'suit': '♥', 'rank': '10'}
    """

    suit: Suit
    rank: Rank

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank}")

    def to_dict(self) -> Dict[str, str]:
        """Plain wire form of the card."""
        return {"suit": self.suit.value, "rank": self.rank.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Card":
        """
        Build a card from its wire form.

        :param data: Mapping with ``suit`` and ``rank`` string values
        :raises ValueError: If the suit or rank is unknown
        """
        if not isinstance(data, dict):
            raise ValueError(f"Invalid card payload: {data!r}")
        try:
            return cls(Suit(data.get("suit")), Rank(str(data.get("rank"))))
        except ValueError as e:
            raise ValueError(f"Invalid card payload: {data!r}") from e

    def __repr__(self) -> str:
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        return f"{self.rank.rank_str} of {self.suit}"
