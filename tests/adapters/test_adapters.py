"""
Tests for the platform adapters.
"""

import json
from unittest.mock import AsyncMock

import pytest
from websockets.exceptions import ConnectionClosed

from fooldeck.adapters import DummyAdapter, PlatformAdapter, WebSocketAdapter
from fooldeck.events import EngineEventType


def test_platform_adapter_is_abstract():
    with pytest.raises(TypeError):
        PlatformAdapter()


@pytest.mark.asyncio
class TestDummyAdapter:
    async def test_records_everything(self):
        adapter = DummyAdapter()

        await adapter.render_game_state({"phase": "attack"})
        await adapter.notify_error("p1", "Not your turn")
        await adapter.notify_game_event(EngineEventType.GAME_ENDED, {"winner_id": "p1"})
        await adapter.notify_game_event("custom", {"x": 1})

        assert adapter.last_state == {"phase": "attack"}
        assert adapter.errors == [("p1", "Not your turn")]
        assert adapter.get_events_by_type(EngineEventType.GAME_ENDED) == [{"winner_id": "p1"}]
        assert adapter.get_events_by_type("custom") == [{"x": 1}]

        adapter.clear()
        assert adapter.last_state == {}
        assert adapter.errors == []
        assert adapter.events == []

    async def test_verbose_prints(self, capsys):
        adapter = DummyAdapter(verbose=True)

        await adapter.render_game_state(
            {
                "trump_suit": "♥",
                "phase": "attack",
                "players": [{"name": "You", "hand": [{"suit": "♠", "rank": "6"}]}],
                "message": "Game started",
            }
        )

        out = capsys.readouterr().out
        assert "You: 6♠" in out
        assert "Game started" in out


@pytest.mark.asyncio
class TestWebSocketAdapter:
    async def test_broadcast_skips_closed_connections(self):
        adapter = WebSocketAdapter()
        good = AsyncMock()
        dead = AsyncMock()
        dead.send.side_effect = ConnectionClosed(None, None)
        adapter.register("a", good)
        adapter.register("b", dead)

        sent = await adapter.broadcast({"type": "menu", "you": "a"})

        assert sent == 1
        good.send.assert_awaited_once_with(json.dumps({"type": "menu", "you": "a"}))

    async def test_send_to_unknown_client(self):
        adapter = WebSocketAdapter()
        assert await adapter.send_to("nobody", {"type": "hello"}) is False

    async def test_state_carries_controller(self):
        adapter = WebSocketAdapter()
        connection = AsyncMock()
        adapter.register("a", connection)
        adapter.human_id = "a"

        await adapter.render_game_state({"phase": "defend"})

        payload = json.loads(connection.send.await_args[0][0])
        assert payload == {"type": "state", "you": "a", "state": {"phase": "defend"}}

    async def test_seat_errors_go_to_the_controller(self):
        adapter = WebSocketAdapter()
        seat = AsyncMock()
        controller = AsyncMock()
        adapter.register("seat", seat)
        adapter.register("controller", controller)
        adapter.seat_id = "seat"
        adapter.human_id = "controller"

        await adapter.notify_error("seat", "Not your turn")

        seat.send.assert_not_awaited()
        payload = json.loads(controller.send.await_args[0][0])
        assert payload == {"type": "error", "message": "Not your turn"}

    async def test_game_events_are_broadcast_by_name(self):
        adapter = WebSocketAdapter()
        connection = AsyncMock()
        adapter.register("a", connection)

        await adapter.notify_game_event(EngineEventType.GAME_ENDED, {"winner_id": None})

        payload = json.loads(connection.send.await_args[0][0])
        assert payload == {
            "type": "event",
            "event_type": "GAME_ENDED",
            "data": {"winner_id": None},
        }

    async def test_shutdown_closes_connections(self):
        adapter = WebSocketAdapter()
        open_connection = AsyncMock()
        closed_connection = AsyncMock()
        closed_connection.close.side_effect = ConnectionClosed(None, None)
        adapter.register("a", open_connection)
        adapter.register("b", closed_connection)

        await adapter.shutdown()

        open_connection.close.assert_awaited_once()
        assert adapter.clients == {}
