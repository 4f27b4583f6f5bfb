"""
Durak session host.

This module provides the DurakEngine class, which owns one human-versus-bot
game, applies player actions through the transition engine, lets the bot
answer, and renders every accepted change through its platform adapter.
"""

from typing import Dict, Any, List, Optional
import asyncio
import logging
import time
import uuid

from fooldeck.adapters import PlatformAdapter
from fooldeck.bots import BotStrategy, LowestCardBot, decide_bot_action
from fooldeck.engine.base import GameEngine
from fooldeck.events import EngineEventType
from fooldeck.durak.actions import Action
from fooldeck.durak.rules import legal_attacks, legal_defenses
from fooldeck.durak.state import DurakRules, GameState, Phase
from fooldeck.durak.transitions import ApplyResult, StateTransitionEngine

logger = logging.getLogger("fooldeck.engine.durak")


class DurakEngine(GameEngine):
    """
    Session host for a two-player Durak game.

    Actions are applied one at a time under a lock, so several engines can run
    side by side in one event loop, each with its own state.
    """

    def __init__(
        self,
        adapter: PlatformAdapter,
        config: Optional[Dict[str, Any]] = None,
        strategy: Optional[BotStrategy] = None,
    ):
        """
        Initialize the Durak engine.

        Args:
            adapter: Platform adapter to use for rendering
            config: Configuration options for the game
            strategy: Bot policy, a LowestCardBot if omitted
        """
        super().__init__(adapter, config)

        # Apply default configuration
        default_config = {
            "hand_size": 6,
            "bot_turn_limit": 50,  # safety cap for the bot loop
            "human_name": "You",
            "bot_name": "Bot",
        }

        # Merge with provided config
        if config:
            default_config.update(config)

        self.config = default_config

        # Create the rules
        self.rules = DurakRules(
            hand_size=self.config.get("hand_size", 6),
            bot_turn_limit=self.config.get("bot_turn_limit", 50),
        )

        self.strategy = strategy or LowestCardBot()
        self.state: Optional[GameState] = None
        self.bot_id: Optional[str] = None
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for a game.
        """
        await super().initialize()

        self.event_bus.emit(
            EngineEventType.ENGINE_INIT,
            {
                "engine_type": "durak",
                "config": self.config,
                "timestamp": time.time(),
            },
        )

    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        self.event_bus.emit(EngineEventType.ENGINE_SHUTDOWN, {"timestamp": time.time()})

        await super().shutdown()

    def ensure_bot_id(self) -> str:
        if self.bot_id is None:
            self.bot_id = f"bot-{uuid.uuid4().hex[:10]}"
        return self.bot_id

    async def start_game(self, human_id: str, bot_id: Optional[str] = None) -> GameState:
        """
        Start a new game of Durak, replacing any game in progress.

        Args:
            human_id: ID of the human player
            bot_id: ID for the bot seat, generated once if omitted

        Returns:
            The freshly dealt game state
        """
        if bot_id is not None:
            self.bot_id = bot_id

        async with self._lock:
            self.state = StateTransitionEngine.initialize_game(
                human_id,
                self.ensure_bot_id(),
                rules=self.rules,
                human_name=self.config["human_name"],
                bot_name=self.config["bot_name"],
            )

        logger.info(f"Game {self.state.id} started. Trump: {self.state.trump_suit}")
        self.event_bus.emit(
            EngineEventType.GAME_STARTED,
            {"game_id": self.state.id, "timestamp": time.time()},
        )

        await self.render_state()
        return self.state

    async def execute_player_action(self, player_id: str, action: Action) -> ApplyResult:
        """
        Execute a player action in Durak.

        A rejected action is reported to the acting player only. An accepted
        one lets the bot respond before the new state is rendered.

        Args:
            player_id: ID of the player
            action: Action to perform

        Returns:
            The result of applying the player's action
        """
        if self.state is None:
            raise ValueError("No game in progress")

        async with self._lock:
            result = StateTransitionEngine.apply_action(self.state, player_id, action)
            self.state = result.state

            if result.accepted:
                self._process_bot_turns()

        if not result.accepted:
            self.event_bus.emit(
                EngineEventType.ACTION_REJECTED,
                {"player_id": player_id, "reason": result.reason},
            )
            await self.adapter.notify_error(player_id, result.reason)
            return result

        await self._announce_if_finished()
        await self.render_state()
        return result

    async def process_bot_turns(self) -> int:
        """
        Let the bot act until it has nothing to do.

        Returns:
            Number of bot actions applied
        """
        async with self._lock:
            count = self._process_bot_turns()

        if count:
            await self._announce_if_finished()
            await self.render_state()
        return count

    def _process_bot_turns(self) -> int:
        count = 0
        while count < self.rules.bot_turn_limit:
            if self.state is None or self.state.phase == Phase.FINISHED:
                break

            action = decide_bot_action(self.state, self.strategy)
            if action is None:
                break

            result = StateTransitionEngine.apply_action(self.state, self.bot_id, action)
            if not result.accepted:
                logger.warning(f"Bot action {action!r} rejected: {result.reason}")
                break

            self.state = result.state
            count += 1
            self.event_bus.emit(
                EngineEventType.BOT_ACTION,
                {"game_id": self.state.id, "action": action.to_dict()},
            )
        else:
            logger.warning(
                f"Bot turn limit of {self.rules.bot_turn_limit} reached in game "
                f"{self.state.id}"
            )

        return count

    async def concede(self, player_id: str) -> ApplyResult:
        """
        Surrender the game on behalf of a player.

        Args:
            player_id: ID of the player giving up

        Returns:
            The result of the surrender
        """
        if self.state is None:
            raise ValueError("No game in progress")

        async with self._lock:
            result = StateTransitionEngine.concede(self.state, player_id)
            self.state = result.state

        if not result.accepted:
            await self.adapter.notify_error(player_id, result.reason)
            return result

        await self._announce_if_finished()
        await self.render_state()
        return result

    async def leave(self) -> None:
        """Drop the current game without a result."""
        async with self._lock:
            self.state = None

    async def render_state(self) -> None:
        """
        Render the current game state.
        """
        if self.state is None:
            return
        await self.adapter.render_game_state(self.state.to_dict())

    async def _announce_if_finished(self) -> None:
        if self.state is None or self.state.phase != Phase.FINISHED:
            return
        await self.adapter.notify_game_event(
            EngineEventType.GAME_ENDED,
            {"game_id": self.state.id, "winner_id": self.state.winner_id},
        )

    def get_valid_actions(self, player_id: str) -> Dict[str, List[Any]]:
        """
        Get valid actions for a player.

        Args:
            player_id: ID of the player

        Returns:
            Dictionary mapping action kinds to their valid parameters: cards for
            "attack", (attack_index, card) pairs for "defend", and an empty
            list for "take" and "done"
        """
        if self.state is None or self.state.phase == Phase.FINISHED:
            return {}

        me = self.state.player_index(player_id)
        if me is None:
            return {}

        state = self.state
        valid_actions: Dict[str, List[Any]] = {}

        if me == state.attacker and state.phase in (Phase.ATTACK, Phase.THROW):
            attacks = legal_attacks(state, me)
            if attacks and len(state.table) < state.current_defender.card_count:
                valid_actions["attack"] = attacks
            if state.phase == Phase.THROW or (
                state.table and all(not slot.is_open for slot in state.table)
            ):
                valid_actions["done"] = []

        if me == state.defender:
            if state.phase == Phase.DEFEND:
                defenses = [
                    (index, card)
                    for index in state.open_slots
                    for card in legal_defenses(state, me, index)
                ]
                if defenses:
                    valid_actions["defend"] = defenses
            if state.table and state.phase != Phase.THROW:
                valid_actions["take"] = []

        return valid_actions

    def is_game_over(self) -> bool:
        """
        Check if the game is over.

        Returns:
            True if the game is over, False otherwise
        """
        return self.state is not None and self.state.phase == Phase.FINISHED

    def get_winner(self) -> Optional[str]:
        """
        Get the ID of the player who won the game.

        Returns:
            ID of the winner, or None if the game is not over or was drawn
        """
        if not self.is_game_over():
            return None
        return self.state.winner_id
