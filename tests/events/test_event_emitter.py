"""
Tests for the event system.

This module contains tests for the EventEmitter and EventBus classes
to ensure they provide the expected behavior for event handling.
"""

import threading
from unittest.mock import MagicMock

from fooldeck.events import EventEmitter, EventBus, EngineEventType, EventPriority


def test_on_with_string_event_type():
    """Test subscribing to an event with a string event type."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on("test_event", callback)
    emitter.emit("test_event", {"data": "test"})

    callback.assert_called_once_with({"data": "test"})
    assert callable(unsubscribe)


def test_on_with_enum_event_type():
    """Enum event types are keyed by their name."""
    emitter = EventEmitter()
    callback = MagicMock()

    emitter.on(EngineEventType.GAME_CREATED, callback)
    emitter.emit("GAME_CREATED", {"game_id": "g"})

    callback.assert_called_once_with({"game_id": "g"})


def test_unsubscribe():
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on("test_event", callback)
    unsubscribe()
    emitter.emit("test_event", {})

    callback.assert_not_called()


def test_once():
    emitter = EventEmitter()
    callback = MagicMock()

    emitter.once("test_event", callback)
    emitter.emit("test_event", {"n": 1})
    emitter.emit("test_event", {"n": 2})

    callback.assert_called_once_with({"n": 1})


def test_on_any_receives_type_and_data():
    emitter = EventEmitter()
    callback = MagicMock()

    emitter.on_any(callback)
    emitter.emit(EngineEventType.PLAYER_ACTION, {"player_id": "p1"})

    callback.assert_called_once_with(("PLAYER_ACTION", {"player_id": "p1"}))


def test_priority_order():
    """Higher priorities run first, equal priorities in subscription order."""
    emitter = EventEmitter()
    calls = []

    emitter.on("e", lambda data: calls.append("normal-1"))
    emitter.on("e", lambda data: calls.append("low"), EventPriority.LOW)
    emitter.on("e", lambda data: calls.append("critical"), EventPriority.CRITICAL)
    emitter.on("e", lambda data: calls.append("normal-2"))
    emitter.on("e", lambda data: calls.append("high"), EventPriority.HIGH)

    emitter.emit("e", {})

    assert calls == ["critical", "high", "normal-1", "normal-2", "low"]


def test_handler_errors_are_contained():
    emitter = EventEmitter()
    after = MagicMock()

    emitter.on("e", MagicMock(side_effect=RuntimeError("boom")), EventPriority.HIGH)
    emitter.on("e", after)

    emitter.emit("e", {"x": 1})

    after.assert_called_once_with({"x": 1})


def test_remove_all_listeners():
    emitter = EventEmitter()
    first = MagicMock()
    second = MagicMock()
    anything = MagicMock()
    emitter.on("a", first)
    emitter.on("b", second)
    emitter.on_any(anything)

    emitter.remove_all_listeners("a")
    emitter.emit("a", {})
    emitter.emit("b", {})
    first.assert_not_called()
    second.assert_called_once()

    emitter.remove_all_listeners()
    anything.reset_mock()
    emitter.emit("b", {})
    second.assert_called_once()
    anything.assert_not_called()


def test_event_bus_singleton():
    assert EventBus.get_instance() is EventBus.get_instance()


def test_thread_safe_emission():
    emitter = EventEmitter()
    counter = []
    lock = threading.Lock()

    def handler(data):
        with lock:
            counter.append(data["i"])

    emitter.on("tick", handler)
    threads = [
        threading.Thread(target=lambda i=i: emitter.emit("tick", {"i": i}))
        for i in range(20)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(counter) == list(range(20))
