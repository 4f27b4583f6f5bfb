"""
Play Durak against the bot in the terminal.

This script drives a DurakEngine directly: it lists the moves the engine
considers valid, applies the one you pick and lets the bot answer.
"""

import argparse
import asyncio
from typing import Any, Dict, List, Optional, Tuple

from fooldeck.adapters import DummyAdapter
from fooldeck.durak.actions import Action, Attack, Defend, Done, Take
from fooldeck.durak.state import GameState
from fooldeck.engine import DurakEngine

HUMAN_ID = "human"


class DurakDemo:
    """
    Command-line front end for a single game against the bot.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, verbose: bool = False):
        """
        Initialize the demo.

        Args:
            config: Configuration options for the engine
            verbose: Print every rendered state and event as well
        """
        self.adapter = DummyAdapter(verbose=verbose)
        self.engine = DurakEngine(self.adapter, config)

    async def setup_game(self) -> None:
        await self.engine.initialize()
        await self.engine.start_game(HUMAN_ID)
        print(f"Trump: {self.engine.state.trump_card}")

    async def play_game(self) -> None:
        """
        Play until the game is over or the player gives up.
        """
        while not self.engine.is_game_over():
            state = self.engine.state
            self._display_state(state)

            choices = self._list_choices(self.engine.get_valid_actions(HUMAN_ID))
            if not choices:
                # Nothing for us to do, let the bot move
                if not await self.engine.process_bot_turns():
                    print("No moves available, something went wrong.")
                    break
                continue

            action = self._get_user_action(choices)
            if action is None:
                await self.engine.concede(HUMAN_ID)
                break

            result = await self.engine.execute_player_action(HUMAN_ID, action)
            if not result.accepted:
                print(f"Rejected: {result.reason}")

            print("\n" + "-" * 40)

        state = self.engine.state
        print("\nGame over!")
        print(state.message)

    def _list_choices(
        self, valid_actions: Dict[str, List[Any]]
    ) -> List[Tuple[str, Action]]:
        choices = []
        for card in valid_actions.get("attack", []):
            choices.append((f"Attack with {card}", Attack(card)))
        for index, card in valid_actions.get("defend", []):
            attack = self.engine.state.table[index].attack
            choices.append((f"Beat {attack} with {card}", Defend(index, card)))
        if "take" in valid_actions:
            choices.append(("Take the cards", Take()))
        if "done" in valid_actions:
            choices.append(("Finish the turn", Done()))
        return choices

    def _get_user_action(self, choices: List[Tuple[str, Action]]) -> Optional[Action]:
        """
        Ask for a move.

        Returns:
            The chosen action, or None to concede
        """
        print("Valid actions:")
        for i, (label, _) in enumerate(choices):
            print(f"{i + 1}. {label}")
        print("0. Concede")

        choice = -1
        while choice < 0 or choice > len(choices):
            try:
                choice = int(input(f"Enter your choice (0-{len(choices)}): "))
            except ValueError:
                choice = -1

        if choice == 0:
            return None
        return choices[choice - 1][1]

    def _display_state(self, state: GameState) -> None:
        print("\nGame State:")
        print(f"Phase: {state.phase.value}")
        print(f"Trump Suit: {state.trump_suit}")
        print(f"Deck remaining: {state.deck_size}")

        print("\nTable:")
        for i, slot in enumerate(state.table):
            defense_str = f" <- {slot.defend}" if slot.defend else ""
            print(f"  {i + 1}. {slot.attack}{defense_str}")

        print("\nPlayers:")
        for index, player in enumerate(state.players):
            role = ""
            if index == state.attacker:
                role = " (Attacker)"
            elif index == state.defender:
                role = " (Defender)"
            print(f"  {player.name}{role}: {player.card_count} cards")

        hand = state.players[state.player_index(HUMAN_ID)].hand
        print(f"\nYour hand: {', '.join(str(card) for card in hand)}")
        if state.message:
            print(state.message)

    async def shutdown(self) -> None:
        await self.engine.shutdown()


async def main():
    parser = argparse.ArgumentParser(description="Play Durak against the bot")
    parser.add_argument("--hand-size", type=int, default=6, help="Cards per hand")
    parser.add_argument("--verbose", action="store_true", help="Print engine output")
    args = parser.parse_args()

    demo = DurakDemo({"hand_size": args.hand_size}, verbose=args.verbose)

    try:
        await demo.setup_game()
        await demo.play_game()
    finally:
        await demo.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
