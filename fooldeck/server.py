#!/usr/bin/env python3
"""
Single-room WebSocket relay for fooldeck.

Every connected client watches the same game. The first client to connect
controls the human seat, and control moves to whichever client starts,
resets, leaves or acts. Everyone else is a spectator.
"""

import argparse
import asyncio
import json
import logging
import os
import uuid
from typing import Any, Dict, Optional

import websockets
from websockets.exceptions import ConnectionClosed

from fooldeck.adapters.websocket import ServerMessage, WebSocketAdapter
from fooldeck.durak.actions import action_from_dict
from fooldeck.durak.errors import UnknownAction
from fooldeck.engine.durak import DurakEngine

logger = logging.getLogger("fooldeck.server")


class ClientMessage:
    """Message types that clients can send to the server."""

    HELLO = "hello"
    START = "start"
    RESET = "reset"
    LEAVE = "leave"
    CONCEDE = "concede"
    ACTION = "action"


class DurakServer:
    """
    WebSocket server hosting one Durak room.

    The room holds at most one game at a time. The seat id of the human
    player is fixed when the game is dealt, and every action from the
    controlling client is applied to that seat.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8080,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the server.

        Args:
            host: Host to bind to
            port: Port to bind to
            config: Engine configuration options
        """
        self.host = host
        self.port = port
        self.adapter = WebSocketAdapter()
        self.engine = DurakEngine(self.adapter, config)

    @property
    def human_id(self) -> Optional[str]:
        return self.adapter.human_id

    @human_id.setter
    def human_id(self, client_id: Optional[str]) -> None:
        self.adapter.human_id = client_id

    @property
    def seat_id(self) -> Optional[str]:
        return self.adapter.seat_id

    @seat_id.setter
    def seat_id(self, player_id: Optional[str]) -> None:
        self.adapter.seat_id = player_id

    async def start(self) -> None:
        """Start serving and run until cancelled."""
        await self.engine.initialize()
        try:
            async with websockets.serve(self.handle_client, self.host, self.port):
                logger.info(f"WebSocket listening on ws://{self.host}:{self.port}")
                await asyncio.Future()
        finally:
            await self.engine.shutdown()

    async def handle_client(self, websocket) -> None:
        """
        Handle one client connection from connect to close.

        Args:
            websocket: WebSocket connection
        """
        client_id = await self.connect_client(websocket)
        try:
            async for raw in websocket:
                await self.handle_message(client_id, raw)
        except ConnectionClosed as e:
            logger.debug(f"Connection to {client_id} closed: {e}")
        finally:
            self.disconnect_client(client_id)

    async def connect_client(self, websocket) -> str:
        """
        Register a new connection and greet it.

        Returns:
            The client ID assigned to the connection
        """
        client_id = uuid.uuid4().hex[:10]
        self.adapter.register(client_id, websocket)
        logger.info(f"Client connected: {client_id}")

        if self.human_id is None:
            self.human_id = client_id
            logger.info(f"Human assigned: {client_id}")
        else:
            logger.info(f"Spectator connected: {client_id}")
        self.engine.ensure_bot_id()

        await self.greet(client_id)
        return client_id

    def disconnect_client(self, client_id: str) -> None:
        # Control is kept: it can be taken back with an action or a restart.
        self.adapter.unregister(client_id)
        logger.info(f"Client disconnected: {client_id}")

    async def greet(self, client_id: str) -> None:
        await self.adapter.send_to(
            client_id, {"type": ServerMessage.HELLO, "you": self.human_id}
        )
        await self.publish()

    async def publish(self) -> None:
        """Show the current game, or the menu when there is none."""
        if self.engine.state is None:
            await self.adapter.render_menu()
        else:
            await self.engine.render_state()

    async def handle_message(self, client_id: str, raw: Any) -> None:
        """
        Dispatch one client message.

        Malformed JSON and unknown message types are ignored.

        Args:
            client_id: ID of the sending client
            raw: Raw message text
        """
        try:
            message = json.loads(raw)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring malformed message from {client_id}")
            return
        if not isinstance(message, dict):
            return

        message_type = message.get("type")

        if message_type == ClientMessage.HELLO:
            await self.greet(client_id)
        elif message_type in (ClientMessage.START, ClientMessage.RESET):
            await self.start_game(client_id)
        elif message_type == ClientMessage.LEAVE:
            self.human_id = client_id
            self.seat_id = None
            await self.engine.leave()
            await self.adapter.render_menu()
        elif message_type == ClientMessage.CONCEDE:
            await self.concede(client_id)
        elif message_type == ClientMessage.ACTION:
            await self.apply(client_id, message.get("action"))
        else:
            logger.debug(f"Unknown message type from {client_id}: {message_type!r}")

    async def start_game(self, client_id: str) -> None:
        self.human_id = client_id
        self.seat_id = client_id
        await self.engine.start_game(client_id)

    async def concede(self, client_id: str) -> None:
        if self.engine.state is None:
            return
        if client_id != self.human_id:
            await self.adapter.send_to(
                client_id,
                {
                    "type": ServerMessage.ERROR,
                    "message": "Only the active player can concede",
                },
            )
            return
        await self.engine.concede(self.seat_id)

    async def apply(self, client_id: str, payload: Any) -> None:
        if self.engine.state is None:
            return

        if client_id != self.human_id:
            self.human_id = client_id
            logger.info(f"Control switched to: {client_id}")

        try:
            action = action_from_dict(payload)
        except UnknownAction as e:
            await self.adapter.send_to(
                client_id, {"type": ServerMessage.ERROR, "message": e.message}
            )
            return

        await self.engine.execute_player_action(self.seat_id, action)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="WebSocket server for fooldeck")
    parser.add_argument("--host", type=str, default="localhost", help="Host to bind to")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", 8080)),
        help="Port to bind to (defaults to $PORT or 8080)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    """Console entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)
    server = DurakServer(args.host, args.port)
    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        logger.info("Shutting down WebSocket server...")


if __name__ == "__main__":
    main()
