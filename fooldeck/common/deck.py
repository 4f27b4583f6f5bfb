"""
This module builds and shuffles the 36-card Durak deck.

>>> deck = build_deck()
>>> len(deck)
36
>>> deck[0]
Card(Suit.SPADES, Rank.SIX)
>>> len(shuffle(deck))
36
"""

import random
from typing import List, Optional, Sequence, TypeVar

from fooldeck.common.card import Card, Rank, Suit

T = TypeVar("T")

# Precompute the default deck
_default_deck = [Card(suit, rank) for suit in Suit for rank in Rank]


def build_deck() -> List[Card]:
    """
    Construct the 36-card deck in suit then rank enumeration order.

    :return: A new list of Card instances, no shuffling applied.
    """
    return _default_deck.copy()


def shuffle(cards: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a uniformly shuffled copy of ``cards``.

    :param cards: The sequence to shuffle; it is left untouched.
    :param rng: Optional random source, the module-level one is used if omitted.
    :return: A new list holding the same elements.
    """
    shuffled = list(cards)
    (rng or random).shuffle(shuffled)
    return shuffled
