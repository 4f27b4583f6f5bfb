"""
Event system for the fooldeck engine.

This package provides the event bus the rules engine and the session host
report through.
"""

from fooldeck.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]
