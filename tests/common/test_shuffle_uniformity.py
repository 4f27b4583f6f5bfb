"""
Tests for shuffle uniformity.

A fair shuffle puts every card in every position equally often. With 36
positions the chi-square statistic has 35 degrees of freedom and exceeds
80 with a probability of about 2e-5, so only a biased shuffle fails.
"""

import random

from fooldeck.common.card import Card, Rank, Suit
from fooldeck.common.deck import build_deck, shuffle
from fooldeck.common.util import uniformity_chi_square

CRITICAL_VALUE_35_DOF = 80.0


def test_bottom_card_is_uniform():
    rng = random.Random(2024)
    deck = build_deck()

    samples = [shuffle(deck, rng)[-1] for _ in range(7200)]

    assert uniformity_chi_square(samples, deck) < CRITICAL_VALUE_35_DOF


def test_card_lands_anywhere():
    rng = random.Random(7)
    deck = build_deck()
    ace = Card(Suit.SPADES, Rank.ACE)

    samples = [shuffle(deck, rng).index(ace) for _ in range(7200)]

    assert uniformity_chi_square(samples, list(range(36))) < CRITICAL_VALUE_35_DOF


def test_trump_suit_is_uniform():
    rng = random.Random(11)
    deck = build_deck()

    samples = [shuffle(deck, rng)[-1].suit for _ in range(4000)]

    # Three degrees of freedom
    assert uniformity_chi_square(samples, list(Suit)) < 25.0
