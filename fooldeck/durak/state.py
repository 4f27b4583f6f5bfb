"""
Immutable state models for the Durak card game.

This module provides dataclasses for representing the state of a two-player
Durak game in an immutable manner. These classes are designed to be used with
pure transition functions that create new state instances rather than
modifying existing ones, and they serialize to plain data so a host can send
them to viewers verbatim.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
import uuid

from fooldeck.common.card import Card, Suit
from fooldeck.durak.constants import BOT_TURN_LIMIT, HAND_SIZE


class Phase(Enum):
    """Possible phases of a Durak exchange."""

    ATTACK = "attack"  # attacker may open or extend, defender waits
    DEFEND = "defend"  # defender must answer the open attacks
    THROW = "throw"  # defender is taking, attacker may throw in more
    FINISHED = "finished"


class PlayerType(Enum):
    """Who controls a seat. Informational only, the rules treat both alike."""

    HUMAN = "human"
    BOT = "bot"


@dataclass(frozen=True)
class TableSlot:
    """
    One attack on the table and the card that beat it, if any.

    Attributes:
        attack: Card played by the attacker
        defend: Card the defender covered it with, None while open
    """

    attack: Card
    defend: Optional[Card] = None

    @property
    def is_open(self) -> bool:
        """Check if the attack is still undefended."""
        return self.defend is None

    @property
    def cards(self) -> List[Card]:
        """Both cards of the slot, attack first."""
        return [self.attack] if self.defend is None else [self.attack, self.defend]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attack": self.attack.to_dict(),
            "defend": self.defend.to_dict() if self.defend else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableSlot":
        defend = data.get("defend")
        return cls(
            attack=Card.from_dict(data["attack"]),
            defend=Card.from_dict(defend) if defend else None,
        )


@dataclass(frozen=True)
class Player:
    """
    Immutable representation of a seat in Durak.

    Attributes:
        id: Stable identifier assigned by the host
        name: Display name of the player
        type: Human or bot
        hand: Cards in the player's hand, in presentation order
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = "Player"
    type: PlayerType = PlayerType.HUMAN
    hand: List[Card] = field(default_factory=list)

    @property
    def card_count(self) -> int:
        """Get the number of cards in the player's hand."""
        return len(self.hand)

    @property
    def is_bot(self) -> bool:
        return self.type == PlayerType.BOT

    def has_card(self, card: Card) -> bool:
        """Check if player holds exactly this card."""
        return card in self.hand

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "hand": [card.to_dict() for card in self.hand],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(
            id=data["id"],
            name=data.get("name", "Player"),
            type=PlayerType(data.get("type", PlayerType.HUMAN.value)),
            hand=[Card.from_dict(card) for card in data.get("hand", [])],
        )


@dataclass(frozen=True)
class DurakRules:
    """
    Immutable representation of the rules for a Durak game.

    Attributes:
        hand_size: Hands are refilled up to this many cards
        bot_turn_limit: Most bot actions a host applies in a row
    """

    hand_size: int = HAND_SIZE
    bot_turn_limit: int = BOT_TURN_LIMIT

    def to_dict(self) -> Dict[str, Any]:
        return {"hand_size": self.hand_size, "bot_turn_limit": self.bot_turn_limit}


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the Durak card game state.

    Attributes:
        id: Unique identifier for this game
        deck: Cards remaining in the deck, the last one is drawn next
        trump_suit: The trump suit for this game
        trump_card: Bottom card of the shuffled deck that set the trump suit
        players: The two seats
        attacker: Index of the current attacker
        defender: Index of the current defender
        table: Attack slots in the order they were played
        discard: Cards retired after a successful defense
        phase: Current phase of the exchange
        winner_id: Winner once finished, None for a draw
        message: Narration of the last transition
        rules: Rules for this game
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    deck: List[Card] = field(default_factory=list)
    trump_suit: Optional[Suit] = None
    trump_card: Optional[Card] = None
    players: List[Player] = field(default_factory=list)
    attacker: int = 0
    defender: int = 1
    table: List[TableSlot] = field(default_factory=list)
    discard: List[Card] = field(default_factory=list)
    phase: Phase = Phase.ATTACK
    winner_id: Optional[str] = None
    message: Optional[str] = None
    rules: DurakRules = field(default_factory=DurakRules)

    @property
    def deck_size(self) -> int:
        """Get the number of cards left in the deck."""
        return len(self.deck)

    @property
    def current_attacker(self) -> Player:
        return self.players[self.attacker]

    @property
    def current_defender(self) -> Player:
        return self.players[self.defender]

    @property
    def is_finished(self) -> bool:
        return self.phase == Phase.FINISHED

    @property
    def open_slots(self) -> List[int]:
        """Indices of undefended attacks."""
        return [i for i, slot in enumerate(self.table) if slot.is_open]

    def player_index(self, player_id: str) -> Optional[int]:
        """Find the seat of a player, None if unknown."""
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        return None

    def all_cards(self) -> List[Card]:
        """Every card the game tracks, wherever it currently is."""
        cards = list(self.deck)
        for player in self.players:
            cards.extend(player.hand)
        for slot in self.table:
            cards.extend(slot.cards)
        cards.extend(self.discard)
        return cards

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "id": self.id,
            "deck": [card.to_dict() for card in self.deck],
            "trump_suit": self.trump_suit.value if self.trump_suit else None,
            "trump_card": self.trump_card.to_dict() if self.trump_card else None,
            "players": [player.to_dict() for player in self.players],
            "attacker": self.attacker,
            "defender": self.defender,
            "table": [slot.to_dict() for slot in self.table],
            "discard": [card.to_dict() for card in self.discard],
            "phase": self.phase.value,
            "winner_id": self.winner_id,
            "message": self.message,
            "rules": self.rules.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """
        Rebuild a game state from the output of `to_dict`.

        Args:
            data: Serialized game state

        Returns:
            Equivalent GameState instance
        """
        trump_card = data.get("trump_card")
        trump_suit = data.get("trump_suit")
        return cls(
            id=data["id"],
            deck=[Card.from_dict(card) for card in data.get("deck", [])],
            trump_suit=Suit(trump_suit) if trump_suit else None,
            trump_card=Card.from_dict(trump_card) if trump_card else None,
            players=[Player.from_dict(player) for player in data.get("players", [])],
            attacker=data.get("attacker", 0),
            defender=data.get("defender", 1),
            table=[TableSlot.from_dict(slot) for slot in data.get("table", [])],
            discard=[Card.from_dict(card) for card in data.get("discard", [])],
            phase=Phase(data.get("phase", Phase.ATTACK.value)),
            winner_id=data.get("winner_id"),
            message=data.get("message"),
            rules=DurakRules(**data.get("rules", {})),
        )
