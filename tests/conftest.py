"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by the whole suite.
"""

from dataclasses import replace

import pytest

from fooldeck.common.card import Card, Rank, Suit
from fooldeck.durak.state import GameState, Phase, Player, PlayerType
from fooldeck.events import EventBus


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


def c(rank: str, suit: Suit) -> Card:
    """Short card constructor for hand-built scenarios."""
    return Card(suit, Rank(rank))


@pytest.fixture
def two_player_state():
    """
    A hand-built game with hearts as trump, p1 attacking and the bot defending.

    The deck holds a few spare cards so that nobody wins by running out.
    """
    return GameState(
        id="game-1",
        deck=[c("6", Suit.CLUBS), c("7", Suit.CLUBS), c("8", Suit.CLUBS), c("9", Suit.HEARTS)],
        trump_suit=Suit.HEARTS,
        trump_card=c("9", Suit.HEARTS),
        players=[
            Player(
                id="p1",
                name="You",
                type=PlayerType.HUMAN,
                hand=[
                    c("9", Suit.SPADES),
                    c("9", Suit.DIAMONDS),
                    c("J", Suit.DIAMONDS),
                    c("6", Suit.HEARTS),
                ],
            ),
            Player(
                id="bot",
                name="Bot",
                type=PlayerType.BOT,
                hand=[
                    c("7", Suit.DIAMONDS),
                    c("10", Suit.SPADES),
                    c("Q", Suit.SPADES),
                    c("K", Suit.HEARTS),
                ],
            ),
        ],
        attacker=0,
        defender=1,
        phase=Phase.ATTACK,
    )


@pytest.fixture
def with_hands():
    """Factory replacing both hands of a state."""

    def _with_hands(state, first, second):
        players = [
            replace(state.players[0], hand=list(first)),
            replace(state.players[1], hand=list(second)),
        ]
        return replace(state, players=players)

    return _with_hands
