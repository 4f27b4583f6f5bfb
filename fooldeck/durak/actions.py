"""
Player actions for the Durak card game.

Each action is a small immutable value tagged with an `ActionKind`; the
transition engine dispatches on that tag.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Union

from fooldeck.common.card import Card
from fooldeck.durak.errors import UnknownAction


class ActionKind(Enum):
    """Tags for the four player actions."""

    ATTACK = "attack"
    DEFEND = "defend"
    TAKE = "take"
    DONE = "done"


@dataclass(frozen=True)
class Attack:
    """Lead or throw in a card."""

    card: Card
    kind: ClassVar[ActionKind] = ActionKind.ATTACK

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "card": self.card.to_dict()}


@dataclass(frozen=True)
class Defend:
    """Cover the attack at `attack_index` with a card."""

    attack_index: int
    card: Card
    kind: ClassVar[ActionKind] = ActionKind.DEFEND

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "attackIndex": self.attack_index,
            "card": self.card.to_dict(),
        }


@dataclass(frozen=True)
class Take:
    """Defender gives up and will pick up the table."""

    kind: ClassVar[ActionKind] = ActionKind.TAKE

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value}


@dataclass(frozen=True)
class Done:
    """Attacker ends the exchange."""

    kind: ClassVar[ActionKind] = ActionKind.DONE

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value}


Action = Union[Attack, Defend, Take, Done]


def action_from_dict(data: Dict[str, Any]) -> Action:
    """
    Parse an action received from a client.

    Args:
        data: Mapping with a ``kind`` tag and the payload for that kind.
              ``attackIndex`` and ``attack_index`` are both accepted.

    Returns:
        The matching action value

    Raises:
        UnknownAction: If the kind is missing or unknown, or the payload is malformed
    """
    if not isinstance(data, dict):
        raise UnknownAction(f"Action must be an object, got {type(data).__name__}")

    try:
        kind = ActionKind(data.get("kind"))
    except ValueError:
        raise UnknownAction(f"Unknown action: {data.get('kind')!r}") from None

    try:
        match kind:
            case ActionKind.ATTACK:
                return Attack(Card.from_dict(data.get("card")))
            case ActionKind.DEFEND:
                index = data.get("attackIndex", data.get("attack_index"))
                if not isinstance(index, int) or isinstance(index, bool):
                    raise ValueError(f"Invalid attack index: {index!r}")
                return Defend(index, Card.from_dict(data.get("card")))
            case ActionKind.TAKE:
                return Take()
            case ActionKind.DONE:
                return Done()
    except ValueError as e:
        raise UnknownAction(f"Malformed {kind.value} action: {e}") from e
