"""
Durak card game module.

This module provides the implementation for two-player Durak, including
state models, actions, legality queries and state transitions.
"""

from fooldeck.durak.state import (
    GameState as GameState,
    Player as Player,
    PlayerType as PlayerType,
    TableSlot as TableSlot,
    Phase as Phase,
    DurakRules as DurakRules,
)
from fooldeck.durak.actions import (
    Action as Action,
    ActionKind as ActionKind,
    Attack as Attack,
    Defend as Defend,
    Take as Take,
    Done as Done,
    action_from_dict as action_from_dict,
)
from fooldeck.durak.errors import (
    DurakError as DurakError,
    IllegalAction as IllegalAction,
    CardNotInHand as CardNotInHand,
    UnknownAction as UnknownAction,
)
from fooldeck.durak.transitions import (
    ApplyResult as ApplyResult,
    StateTransitionEngine as StateTransitionEngine,
)

__all__ = [
    "GameState",
    "Player",
    "PlayerType",
    "TableSlot",
    "Phase",
    "DurakRules",
    "Action",
    "ActionKind",
    "Attack",
    "Defend",
    "Take",
    "Done",
    "action_from_dict",
    "DurakError",
    "IllegalAction",
    "CardNotInHand",
    "UnknownAction",
    "ApplyResult",
    "StateTransitionEngine",
]
