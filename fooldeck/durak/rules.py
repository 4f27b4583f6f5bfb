"""
Legality queries for Durak.

All functions here are pure: they read a `GameState` and never change it.
"""

from typing import Iterable, List, Set, Tuple

from fooldeck.common.card import Card, Rank, Suit
from fooldeck.durak.constants import SUIT_ORDER, get_durak_value
from fooldeck.durak.state import GameState, Phase


def is_trump(card: Card, trump_suit: Suit) -> bool:
    return card.suit == trump_suit


def beats(attack: Card, candidate: Card, trump_suit: Suit) -> bool:
    """
    Check whether `candidate` covers `attack`.

    A higher card of the same suit beats, and any trump beats a non-trump.
    """
    if attack.suit == candidate.suit:
        return get_durak_value(candidate.rank) > get_durak_value(attack.rank)
    return is_trump(candidate, trump_suit) and not is_trump(attack, trump_suit)


def card_sort_key(card: Card, trump_suit: Suit) -> Tuple[bool, int, int]:
    """Non-trumps first grouped by suit, trumps last, ascending rank within."""
    return (
        is_trump(card, trump_suit),
        SUIT_ORDER[card.suit],
        get_durak_value(card.rank),
    )


def sort_hand(hand: Iterable[Card], trump_suit: Suit) -> List[Card]:
    return sorted(hand, key=lambda card: card_sort_key(card, trump_suit))


def ranks_in_play(state: GameState) -> Set[Rank]:
    """Ranks of every attack and defense card on the table."""
    return {card.rank for slot in state.table for card in slot.cards}


def legal_attacks(state: GameState, player_index: int) -> List[Card]:
    """
    Cards the player may attack with right now.

    Only the attacker may attack, and only in the attack or throw phase. On an
    empty table the whole hand is playable, otherwise only ranks already in play.
    """
    if state.phase not in (Phase.ATTACK, Phase.THROW) or player_index != state.attacker:
        return []

    hand = state.players[player_index].hand
    if not state.table:
        return list(hand)

    ranks = ranks_in_play(state)
    return [card for card in hand if card.rank in ranks]


def can_add_attack(state: GameState) -> bool:
    """
    Check whether the attacker can put another card on the table.

    The defender never faces more slots than cards in hand, and once the table
    has cards the attacker needs a card of a rank already in play.
    """
    if len(state.table) >= state.current_defender.card_count:
        return False
    if not state.table:
        return True

    ranks = ranks_in_play(state)
    return any(card.rank in ranks for card in state.current_attacker.hand)


def legal_defenses(state: GameState, player_index: int, attack_index: int) -> List[Card]:
    """Cards in the defender's hand that beat the open attack at `attack_index`."""
    if state.phase != Phase.DEFEND or player_index != state.defender:
        return []
    if not 0 <= attack_index < len(state.table):
        return []

    slot = state.table[attack_index]
    if not slot.is_open:
        return []

    hand = state.players[player_index].hand
    return [card for card in hand if beats(slot.attack, card, state.trump_suit)]
