"""
Lowest-card bot: always plays its cheapest legal card.
"""

from typing import Optional

from fooldeck.bots.base import BotStrategy
from fooldeck.durak.actions import Action, Attack, Defend, Done, Take
from fooldeck.durak.rules import can_add_attack, legal_attacks, legal_defenses
from fooldeck.durak.state import GameState, Phase


class LowestCardBot(BotStrategy):
    """
    Simple bot that never holds anything back.

    Strategy:
    - Attack and throw in with the lowest legal card, finish when none is left
    - Beat the first open attack with the lowest card that covers it
    - Take when nothing covers it
    """

    def choose_action(self, state: GameState, player_index: int) -> Optional[Action]:
        if state.phase in (Phase.ATTACK, Phase.THROW) and self.is_attacker(
            state, player_index
        ):
            return self._choose_attack(state, player_index)

        if state.phase == Phase.DEFEND and self.is_defender(state, player_index):
            return self._choose_defense(state, player_index)

        return None

    def _choose_attack(self, state: GameState, player_index: int) -> Action:
        if state.table and not can_add_attack(state):
            return Done()

        legals = legal_attacks(state, player_index)
        if not legals:
            return Done()

        return Attack(self.lowest(state, legals))

    def _choose_defense(self, state: GameState, player_index: int) -> Optional[Action]:
        open_slots = state.open_slots
        if not open_slots:
            return None

        first_open = open_slots[0]
        legals = legal_defenses(state, player_index, first_open)
        if not legals:
            return Take()

        return Defend(first_open, self.lowest(state, legals))


def decide_bot_action(
    state: GameState, strategy: Optional[BotStrategy] = None
) -> Optional[Action]:
    """
    Propose the next action for the bot-controlled seat.

    Args:
        state: Current game state
        strategy: Policy to use, a LowestCardBot if omitted

    Returns:
        The proposed action, or None if there is no bot or nothing to do
    """
    if state.phase == Phase.FINISHED:
        return None

    for index, player in enumerate(state.players):
        if player.is_bot:
            return (strategy or LowestCardBot()).choose_action(state, index)
    return None
