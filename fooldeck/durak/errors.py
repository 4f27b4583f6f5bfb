"""
Error types raised while validating Durak actions.

None of these are fatal: the transition engine turns them into a rejected
result and the game continues from the unchanged state.
"""

# Error codes
NOT_YOUR_TURN = "NOT_YOUR_TURN"
WRONG_PHASE = "WRONG_PHASE"
ILLEGAL_CARD = "ILLEGAL_CARD"
CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
ATTACK_LIMIT = "ATTACK_LIMIT"
UNDEFENDED_ATTACKS = "UNDEFENDED_ATTACKS"
UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
GAME_FINISHED = "GAME_FINISHED"
UNKNOWN_ACTION = "UNKNOWN_ACTION"


class DurakError(Exception):
    """Base exception for game-related errors."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class IllegalAction(DurakError):
    """Wrong actor, wrong phase, or a card that is not legal for the move."""


class CardNotInHand(IllegalAction):
    """The action names a card the player does not hold."""

    def __init__(self, message: str = "Card is not in hand"):
        super().__init__(CARD_NOT_IN_HAND, message)


class UnknownAction(DurakError):
    """The action kind or its payload is not recognized."""

    def __init__(self, message: str = "Unknown action"):
        super().__init__(UNKNOWN_ACTION, message)
