"""
Tests for the single-room WebSocket relay.

Connections are faked, so these run without opening any socket.
"""

import json

import pytest

from fooldeck.common.deck import build_deck
from fooldeck.durak.state import Phase
from fooldeck.server import DurakServer, parse_args


class FakeConnection:
    """Stands in for a websockets connection."""

    def __init__(self, incoming=()):
        self.sent = []
        self.incoming = list(incoming)
        self.closed = False

    async def send(self, data):
        self.sent.append(json.loads(data))

    async def close(self):
        self.closed = True

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for message in self.incoming:
            yield message

    def types(self):
        return [message["type"] for message in self.sent]


def msg(**payload) -> str:
    return json.dumps(payload)


@pytest.fixture
def server():
    return DurakServer()


@pytest.mark.asyncio
class TestDurakServer:
    async def test_first_client_controls_the_room(self, server):
        first = FakeConnection()
        second = FakeConnection()

        first_id = await server.connect_client(first)
        second_id = await server.connect_client(second)

        assert server.human_id == first_id
        assert first.sent[0] == {"type": "hello", "you": first_id}
        assert first.sent[1] == {"type": "menu", "you": first_id}
        assert second.sent[0] == {"type": "hello", "you": first_id}
        assert second_id in server.adapter.clients

    async def test_start_deals_and_broadcasts(self, server):
        first = FakeConnection()
        second = FakeConnection()
        first_id = await server.connect_client(first)
        second_id = await server.connect_client(second)

        await server.handle_message(second_id, msg(type="start"))

        assert server.human_id == second_id
        state = server.engine.state
        assert state.players[0].id == second_id
        assert state.players[1].id == server.engine.bot_id
        for connection in (first, second):
            assert connection.sent[-1] == {
                "type": "state",
                "you": second_id,
                "state": state.to_dict(),
            }
        assert first_id != second_id

    async def test_hello_repeats_the_greeting(self, server):
        connection = FakeConnection()
        client_id = await server.connect_client(connection)
        await server.handle_message(client_id, msg(type="start"))
        connection.sent.clear()

        await server.handle_message(client_id, msg(type="hello"))

        assert connection.types() == ["hello", "state"]

    async def test_legal_action_is_applied_and_bot_answers(self, server):
        connection = FakeConnection()
        client_id = await server.connect_client(connection)
        await server.handle_message(client_id, msg(type="start"))
        card = server.engine.state.players[0].hand[0]

        await server.handle_message(
            client_id, msg(type="action", action={"kind": "attack", "card": card.to_dict()})
        )

        state = server.engine.state
        assert state.table[0].attack == card
        # The bot either beat the card or is taking it
        assert state.phase in (Phase.ATTACK, Phase.THROW)
        assert connection.sent[-1]["type"] == "state"

    async def test_illegal_action_goes_back_to_sender_only(self, server):
        player = FakeConnection()
        spectator = FakeConnection()
        client_id = await server.connect_client(player)
        await server.connect_client(spectator)
        await server.handle_message(client_id, msg(type="start"))
        state = server.engine.state
        missing = next(card for card in build_deck() if card not in state.players[0].hand)
        spectator.sent.clear()

        await server.handle_message(
            client_id,
            msg(type="action", action={"kind": "attack", "card": missing.to_dict()}),
        )

        assert player.sent[-1] == {"type": "error", "message": "Card is not in hand"}
        assert spectator.sent == []
        assert server.engine.state is state

    async def test_malformed_action_payload(self, server):
        connection = FakeConnection()
        client_id = await server.connect_client(connection)
        await server.handle_message(client_id, msg(type="start"))

        await server.handle_message(client_id, msg(type="action", action={"kind": "pass"}))

        assert connection.sent[-1]["type"] == "error"
        assert "pass" in connection.sent[-1]["message"]

    async def test_action_without_game_is_ignored(self, server):
        connection = FakeConnection()
        client_id = await server.connect_client(connection)
        connection.sent.clear()

        await server.handle_message(client_id, msg(type="action", action={"kind": "done"}))

        assert connection.sent == []

    async def test_invalid_json_is_ignored(self, server):
        connection = FakeConnection()
        client_id = await server.connect_client(connection)
        connection.sent.clear()

        await server.handle_message(client_id, "{not json")
        await server.handle_message(client_id, "[1, 2]")
        await server.handle_message(client_id, msg(type="dance"))

        assert connection.sent == []

    async def test_action_from_spectator_takes_control(self, server):
        first = FakeConnection()
        second = FakeConnection()
        first_id = await server.connect_client(first)
        second_id = await server.connect_client(second)
        await server.handle_message(first_id, msg(type="start"))
        card = server.engine.state.players[0].hand[0]

        await server.handle_message(
            second_id, msg(type="action", action={"kind": "attack", "card": card.to_dict()})
        )

        assert server.human_id == second_id
        assert server.seat_id == first_id
        assert server.engine.state.table[0].attack == card
        assert second.sent[-1]["you"] == second_id

    async def test_errors_follow_control(self, server):
        first = FakeConnection()
        second = FakeConnection()
        first_id = await server.connect_client(first)
        second_id = await server.connect_client(second)
        await server.handle_message(first_id, msg(type="start"))
        first.sent.clear()

        await server.handle_message(second_id, msg(type="action", action={"kind": "take"}))

        assert second.sent[-1]["type"] == "error"
        assert all(message["type"] != "error" for message in first.sent)

    async def test_only_controller_can_concede(self, server):
        first = FakeConnection()
        second = FakeConnection()
        first_id = await server.connect_client(first)
        second_id = await server.connect_client(second)
        await server.handle_message(first_id, msg(type="start"))

        await server.handle_message(second_id, msg(type="concede"))
        assert second.sent[-1] == {
            "type": "error",
            "message": "Only the active player can concede",
        }
        assert not server.engine.is_game_over()

        await server.handle_message(first_id, msg(type="concede"))
        assert server.engine.is_game_over()
        assert server.engine.get_winner() == server.engine.bot_id
        assert first.sent[-1]["type"] == "state"
        assert first.sent[-1]["state"]["phase"] == "finished"

    async def test_concede_without_game(self, server):
        connection = FakeConnection()
        client_id = await server.connect_client(connection)
        connection.sent.clear()

        await server.handle_message(client_id, msg(type="concede"))

        assert connection.sent == []

    async def test_reset_deals_a_new_game(self, server):
        connection = FakeConnection()
        client_id = await server.connect_client(connection)
        await server.handle_message(client_id, msg(type="start"))
        first_game = server.engine.state.id

        await server.handle_message(client_id, msg(type="reset"))

        assert server.engine.state.id != first_game
        assert server.engine.state.phase == Phase.ATTACK

    async def test_leave_returns_everyone_to_the_menu(self, server):
        first = FakeConnection()
        second = FakeConnection()
        first_id = await server.connect_client(first)
        second_id = await server.connect_client(second)
        await server.handle_message(first_id, msg(type="start"))

        await server.handle_message(second_id, msg(type="leave"))

        assert server.engine.state is None
        assert server.human_id == second_id
        assert first.sent[-1] == {"type": "menu", "you": second_id}
        assert second.sent[-1] == {"type": "menu", "you": second_id}

    async def test_handle_client_runs_until_the_connection_ends(self, server):
        connection = FakeConnection([msg(type="start"), "garbage"])

        await server.handle_client(connection)

        assert server.adapter.clients == {}
        assert server.engine.state is not None
        assert connection.types() == ["hello", "menu", "state"]
        # Control stays with the departed client until someone takes it
        assert server.human_id is not None


def test_parse_args_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    args = parse_args([])
    assert args.host == "localhost"
    assert args.port == 8080


def test_parse_args_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9123")
    assert parse_args([]).port == 9123
    assert parse_args(["--port", "7000", "--host", "0.0.0.0"]).port == 7000
