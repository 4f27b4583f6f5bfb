"""Durak-specific constants and value mappings."""

from fooldeck.common.card import Rank, Suit

# Traditional Russian deck order, six lowest
DURAK_VALUES = {
    Rank.SIX: 0,
    Rank.SEVEN: 1,
    Rank.EIGHT: 2,
    Rank.NINE: 3,
    Rank.TEN: 4,
    Rank.JACK: 5,
    Rank.QUEEN: 6,
    Rank.KING: 7,
    Rank.ACE: 8,  # Ace is highest in Durak
}

SUIT_ORDER = {suit: index for index, suit in enumerate(Suit)}

HAND_SIZE = 6
BOT_TURN_LIMIT = 50


def get_durak_value(rank: Rank) -> int:
    """Get the durak value for a given rank."""
    return DURAK_VALUES[rank]
