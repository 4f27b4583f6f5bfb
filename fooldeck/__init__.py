"""
fooldeck: a two-player Durak ("Fool") rules engine with a bot opponent.

The functions exported here are the boundary a session host needs:

    state = initialize_game("p1", "bot")
    result = apply_action(state, "p1", Attack(state.players[0].hand[0]))
    action = decide_bot_action(result.state)
"""

from fooldeck.common.card import Card, Rank, Suit
from fooldeck.bots import BotStrategy, LowestCardBot, decide_bot_action
from fooldeck.durak import (
    Action,
    ActionKind,
    ApplyResult,
    Attack,
    CardNotInHand,
    Defend,
    Done,
    DurakError,
    DurakRules,
    GameState,
    IllegalAction,
    Phase,
    StateTransitionEngine,
    Take,
    UnknownAction,
    action_from_dict,
)

initialize_game = StateTransitionEngine.initialize_game
apply_action = StateTransitionEngine.apply_action
concede = StateTransitionEngine.concede
deal_up_to = StateTransitionEngine.deal_up_to

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Action",
    "ActionKind",
    "ApplyResult",
    "Attack",
    "Defend",
    "Take",
    "Done",
    "action_from_dict",
    "BotStrategy",
    "LowestCardBot",
    "DurakError",
    "IllegalAction",
    "CardNotInHand",
    "UnknownAction",
    "DurakRules",
    "GameState",
    "Phase",
    "StateTransitionEngine",
    "initialize_game",
    "apply_action",
    "concede",
    "deal_up_to",
    "decide_bot_action",
]
