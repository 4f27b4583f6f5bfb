"""
State transition functions for the Durak card game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects. A rejected action hands back
the very state it was given.
"""

from dataclasses import dataclass, replace
from typing import List, Optional
import logging
import random

from fooldeck.common.card import Card
from fooldeck.common.deck import build_deck, shuffle
from fooldeck.events import EventBus, EngineEventType
from fooldeck.durak import errors
from fooldeck.durak.actions import Action, ActionKind, Attack, Defend
from fooldeck.durak.errors import CardNotInHand, DurakError, IllegalAction, UnknownAction
from fooldeck.durak.rules import legal_attacks, legal_defenses, sort_hand
from fooldeck.durak.state import (
    DurakRules,
    GameState,
    Phase,
    Player,
    PlayerType,
    TableSlot,
)

logger = logging.getLogger("fooldeck.durak.transitions")


@dataclass(frozen=True)
class ApplyResult:
    """
    Outcome of applying an action.

    Attributes:
        accepted: Whether the action was applied
        state: The new state, or the untouched input state on rejection
        reason: Human-readable rejection reason
        error: The validation error behind a rejection
    """

    accepted: bool
    state: GameState
    reason: Optional[str] = None
    error: Optional[DurakError] = None

    @classmethod
    def ok(cls, state: GameState) -> "ApplyResult":
        return cls(accepted=True, state=state)

    @classmethod
    def rejected(cls, state: GameState, error: DurakError) -> "ApplyResult":
        return cls(accepted=False, state=state, reason=error.message, error=error)


def _without(hand: List[Card], card: Card) -> List[Card]:
    """Copy of `hand` with one occurrence of `card` removed."""
    index = hand.index(card)
    return hand[:index] + hand[index + 1 :]


class StateTransitionEngine:
    """
    Pure functions for state transitions in Durak.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def initialize_game(
        human_id: str,
        bot_id: str,
        rules: Optional[DurakRules] = None,
        rng: Optional[random.Random] = None,
        human_name: str = "You",
        bot_name: str = "Bot",
    ) -> GameState:
        """
        Create a new game and deal the opening hands.

        Args:
            human_id: ID of the human player, seated first and attacking first
            bot_id: ID of the bot player
            rules: Rules for the new game (defaults if None)
            rng: Optional random source for the shuffle
            human_name: Display name of the human seat
            bot_name: Display name of the bot seat

        Returns:
            New game state in the attack phase
        """
        deck = shuffle(build_deck(), rng)

        # Bottom card of the deck is the trump
        trump_card = deck[-1]

        state = GameState(
            deck=deck,
            trump_suit=trump_card.suit,
            trump_card=trump_card,
            players=[
                Player(id=human_id, name=human_name, type=PlayerType.HUMAN),
                Player(id=bot_id, name=bot_name, type=PlayerType.BOT),
            ],
            attacker=0,
            defender=1,
            phase=Phase.ATTACK,
            rules=rules or DurakRules(),
            message="Game started",
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_CREATED,
            {
                "game_id": state.id,
                "trump_suit": str(state.trump_suit),
                "trump_card": trump_card.to_dict(),
                "players": [human_id, bot_id],
            },
        )

        return StateTransitionEngine.deal_up_to(state)

    @staticmethod
    def deal_up_to(state: GameState) -> GameState:
        """
        Refill both hands from the deck, attacker first, then sort them.

        Args:
            state: Current game state

        Returns:
            New game state with refilled, sorted hands
        """
        new_deck = list(state.deck)
        new_players = list(state.players)
        dealt = {}

        for index in (state.attacker, state.defender):
            player = new_players[index]
            hand = list(player.hand)
            while len(hand) < state.rules.hand_size and new_deck:
                hand.append(new_deck.pop())
            dealt[player.id] = len(hand) - len(player.hand)
            new_players[index] = replace(player, hand=hand)

        # Sorted for stable presentation
        new_players = [
            replace(player, hand=sort_hand(player.hand, state.trump_suit))
            for player in new_players
        ]

        new_state = replace(state, deck=new_deck, players=new_players)

        if any(dealt.values()):
            event_bus = EventBus.get_instance()
            event_bus.emit(
                EngineEventType.CARD_DEALT,
                {
                    "game_id": state.id,
                    "dealt": dealt,
                    "deck_remaining": len(new_deck),
                },
            )

        return new_state

    @staticmethod
    def apply_action(state: GameState, player_id: str, action: Action) -> ApplyResult:
        """
        Apply a player's action.

        Every check runs before anything is built, so a rejection returns the
        input state itself.

        Args:
            state: Current game state
            player_id: ID of the acting player
            action: The action to apply

        Returns:
            ApplyResult holding the new state, or the rejection reason
        """
        try:
            if state.phase == Phase.FINISHED:
                raise IllegalAction(errors.GAME_FINISHED, "The game is over")

            me = state.player_index(player_id)
            if me is None:
                raise IllegalAction(errors.UNKNOWN_PLAYER, "Player not found")

            match getattr(action, "kind", None):
                case ActionKind.ATTACK:
                    new_state = StateTransitionEngine._attack(state, me, action)
                case ActionKind.DEFEND:
                    new_state = StateTransitionEngine._defend(state, me, action)
                case ActionKind.TAKE:
                    new_state = StateTransitionEngine._take(state, me)
                case ActionKind.DONE:
                    new_state = StateTransitionEngine._done(state, me)
                case _:
                    raise UnknownAction(f"Unknown action: {action!r}")
        except DurakError as e:
            logger.debug(f"Rejected {action!r} from {player_id}: {e}")
            return ApplyResult.rejected(state, e)

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.PLAYER_ACTION,
            {
                "game_id": state.id,
                "player_id": player_id,
                "action": action.to_dict(),
                "phase": new_state.phase.value,
            },
        )
        StateTransitionEngine._announce_finish(state, new_state)

        return ApplyResult.ok(new_state)

    @staticmethod
    def concede(state: GameState, player_id: str) -> ApplyResult:
        """
        Surrender: the opponent wins at once, bypassing the normal rules.

        Args:
            state: Current game state
            player_id: ID of the player giving up

        Returns:
            ApplyResult with the finished state
        """
        if state.phase == Phase.FINISHED:
            return ApplyResult.rejected(
                state, IllegalAction(errors.GAME_FINISHED, "The game is over")
            )

        me = state.player_index(player_id)
        if me is None:
            return ApplyResult.rejected(
                state, IllegalAction(errors.UNKNOWN_PLAYER, "Player not found")
            )

        loser = state.players[me]
        winner = state.players[1 - me]
        new_state = replace(
            state,
            phase=Phase.FINISHED,
            winner_id=winner.id,
            message=f"{loser.name} conceded. {winner.name} wins",
        )

        StateTransitionEngine._announce_finish(state, new_state)
        return ApplyResult.ok(new_state)

    @staticmethod
    def _attack(state: GameState, me: int, action: Attack) -> GameState:
        if me != state.attacker:
            raise IllegalAction(errors.NOT_YOUR_TURN, "It is not your turn to attack")
        if state.phase not in (Phase.ATTACK, Phase.THROW):
            raise IllegalAction(errors.WRONG_PHASE, "You cannot attack right now")

        player = state.players[me]
        if not player.has_card(action.card):
            raise CardNotInHand()
        if action.card not in legal_attacks(state, me):
            raise IllegalAction(
                errors.ILLEGAL_CARD, "This card cannot be used to attack right now"
            )

        # The defender never faces more slots than cards in hand
        if len(state.table) >= state.current_defender.card_count:
            raise IllegalAction(
                errors.ATTACK_LIMIT,
                "No more cards can be added (defender's hand size limit)",
            )

        new_players = list(state.players)
        new_players[me] = replace(player, hand=_without(player.hand, action.card))

        if state.phase == Phase.THROW:
            phase = Phase.THROW
            message = "Throw in more cards or finish the turn"
        else:
            phase = Phase.DEFEND
            message = "Attack more or wait for the defense"

        new_state = replace(
            state,
            players=new_players,
            table=state.table + [TableSlot(attack=action.card)],
            phase=phase,
            message=message,
        )
        return StateTransitionEngine._check_finish(new_state)

    @staticmethod
    def _defend(state: GameState, me: int, action: Defend) -> GameState:
        if me != state.defender:
            raise IllegalAction(errors.NOT_YOUR_TURN, "It is not your turn to defend")
        if state.phase != Phase.DEFEND:
            raise IllegalAction(errors.WRONG_PHASE, "You cannot defend right now")

        index = action.attack_index
        if (
            not isinstance(index, int)
            or not 0 <= index < len(state.table)
            or not state.table[index].is_open
        ):
            raise IllegalAction(errors.ILLEGAL_CARD, "There is no open attack there")

        player = state.players[me]
        if not player.has_card(action.card):
            raise CardNotInHand()
        if action.card not in legal_defenses(state, me, index):
            raise IllegalAction(errors.ILLEGAL_CARD, "This card cannot beat the attack")

        new_players = list(state.players)
        new_players[me] = replace(player, hand=_without(player.hand, action.card))

        new_table = list(state.table)
        new_table[index] = replace(new_table[index], defend=action.card)

        # Once everything is beaten the attacker may add more or finish
        all_defended = all(not slot.is_open for slot in new_table)

        new_state = replace(
            state,
            players=new_players,
            table=new_table,
            phase=Phase.ATTACK if all_defended else Phase.DEFEND,
            message=(
                "You can add an attack or finish the turn"
                if all_defended
                else "Defend against the remaining attacks"
            ),
        )
        return StateTransitionEngine._check_finish(new_state)

    @staticmethod
    def _take(state: GameState, me: int) -> GameState:
        if me != state.defender:
            raise IllegalAction(errors.NOT_YOUR_TURN, "Only the defender can take")
        if state.phase == Phase.THROW:
            raise IllegalAction(errors.WRONG_PHASE, "You are already taking")
        if not state.table:
            raise IllegalAction(errors.WRONG_PHASE, "There is nothing to take")

        return replace(
            state,
            phase=Phase.THROW,
            message="Defender takes. The attacker may throw in cards and then finish",
        )

    @staticmethod
    def _done(state: GameState, me: int) -> GameState:
        if me != state.attacker:
            raise IllegalAction(errors.NOT_YOUR_TURN, "Only the attacker can finish the turn")

        if state.phase == Phase.ATTACK:
            if not state.table:
                raise IllegalAction(errors.WRONG_PHASE, "There is nothing to finish yet")
            if any(slot.is_open for slot in state.table):
                raise IllegalAction(
                    errors.UNDEFENDED_ATTACKS,
                    "Undefended attacks remain. Add more or let the defender take",
                )

            retired = [card for slot in state.table for card in slot.cards]
            cleared = replace(state, table=[], discard=state.discard + retired)

            # Refill with the roles as they were, then swap
            dealt = StateTransitionEngine.deal_up_to(cleared)
            new_state = replace(
                dealt,
                attacker=state.defender,
                defender=state.attacker,
                phase=Phase.ATTACK,
                message="Turn over. Roles switched",
            )
            StateTransitionEngine._announce_round(new_state, defended=True)
            return StateTransitionEngine._check_finish(new_state)

        if state.phase == Phase.THROW:
            # Defender picks up the whole table, roles stay as they are
            defender = state.current_defender
            taken = [card for slot in state.table for card in slot.cards]

            new_players = list(state.players)
            new_players[state.defender] = replace(defender, hand=defender.hand + taken)

            dealt = StateTransitionEngine.deal_up_to(
                replace(state, players=new_players, table=[])
            )
            new_state = replace(
                dealt,
                phase=Phase.ATTACK,
                message="Defender took the cards. Attack again",
            )
            StateTransitionEngine._announce_round(new_state, defended=False)
            return StateTransitionEngine._check_finish(new_state)

        raise IllegalAction(errors.WRONG_PHASE, "You cannot finish the turn right now")

    @staticmethod
    def _check_finish(state: GameState) -> GameState:
        """
        End the game once the deck is empty and a hand has run out.

        Running out of cards first wins; both running out together is a draw.
        """
        if state.deck:
            return state

        empty = [player for player in state.players if not player.hand]
        if not empty:
            return state

        if len(empty) == len(state.players):
            return replace(state, phase=Phase.FINISHED, winner_id=None, message="Draw")

        winner = empty[0]
        return replace(
            state,
            phase=Phase.FINISHED,
            winner_id=winner.id,
            message=f"{winner.name} wins",
        )

    @staticmethod
    def _announce_round(state: GameState, defended: bool) -> None:
        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.ROUND_ENDED,
            {
                "game_id": state.id,
                "defended": defended,
                "attacker": state.current_attacker.id,
                "defender": state.current_defender.id,
                "deck_remaining": state.deck_size,
            },
        )

    @staticmethod
    def _announce_finish(before: GameState, after: GameState) -> None:
        if before.phase == Phase.FINISHED or after.phase != Phase.FINISHED:
            return

        logger.info(f"Game {after.id} finished: {after.message}")
        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_ENDED,
            {
                "game_id": after.id,
                "winner_id": after.winner_id,
                "message": after.message,
            },
        )
