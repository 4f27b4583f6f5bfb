"""
Pluggable bot strategies for automated seats.
"""

from fooldeck.bots.base import BotStrategy
from fooldeck.bots.lowest_card import LowestCardBot, decide_bot_action

__all__ = ["BotStrategy", "LowestCardBot", "decide_bot_action"]
