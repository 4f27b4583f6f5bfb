"""
WebSocket adapter for the fooldeck session host.

This module relays game states to every connected viewer as JSON, and
rejection reasons to the acting client only.
"""

import json
import logging
import time
from enum import Enum
from typing import Any, Dict, Optional, Union

from websockets.exceptions import ConnectionClosed

from fooldeck.adapters.base import PlatformAdapter

logger = logging.getLogger("fooldeck.adapters.websocket")


class ServerMessage:
    """Message types that the server can send to clients."""

    HELLO = "hello"
    MENU = "menu"
    STATE = "state"
    EVENT = "event"
    ERROR = "error"


class WebSocketClient:
    """
    Represents a connected WebSocket client.
    """

    def __init__(self, client_id: str, connection):
        """
        Initialize a WebSocket client.

        Args:
            client_id: Unique identifier for the client
            connection: The websockets connection to send through
        """
        self.id = client_id
        self.connection = connection
        self.connected_at = time.time()

    async def send(self, message: Dict[str, Any]) -> None:
        await self.connection.send(json.dumps(message))


class WebSocketAdapter(PlatformAdapter):
    """
    Adapter that broadcasts the game to WebSocket clients.

    Attributes:
        clients: Connected clients by ID
        human_id: Client currently controlling the human seat
        seat_id: Player ID the human seat was dealt with
    """

    def __init__(self):
        self.clients: Dict[str, WebSocketClient] = {}
        self.human_id: Optional[str] = None
        self.seat_id: Optional[str] = None

    def register(self, client_id: str, connection) -> WebSocketClient:
        client = WebSocketClient(client_id, connection)
        self.clients[client_id] = client
        return client

    def unregister(self, client_id: str) -> None:
        self.clients.pop(client_id, None)

    async def send_to(self, client_id: str, message: Dict[str, Any]) -> bool:
        """
        Send a message to a specific client.

        Args:
            client_id: ID of the client to send to
            message: JSON-serializable message

        Returns:
            True if the message was sent, False otherwise
        """
        client = self.clients.get(client_id)
        if client is None:
            return False

        try:
            await client.send(message)
            return True
        except ConnectionClosed as e:
            logger.warning(f"Error sending message to client {client_id}: {e}")
            return False

    async def broadcast(self, message: Dict[str, Any]) -> int:
        """
        Send a message to every connected client.

        Returns:
            Number of clients the message was sent to
        """
        count = 0
        for client_id in list(self.clients):
            if await self.send_to(client_id, message):
                count += 1
        return count

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        await self.broadcast(
            {"type": ServerMessage.STATE, "you": self.human_id, "state": state}
        )

    async def render_menu(self) -> None:
        """Show the start screen to everyone while no game is running."""
        await self.broadcast({"type": ServerMessage.MENU, "you": self.human_id})

    async def notify_error(self, player_id: str, message: str) -> None:
        # The human seat keeps the id it was dealt with while control may
        # have moved to another connection.
        target = self.human_id if player_id == self.seat_id else player_id
        await self.send_to(target, {"type": ServerMessage.ERROR, "message": message})

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        if isinstance(event_type, Enum):
            event_type = event_type.name
        await self.broadcast(
            {"type": ServerMessage.EVENT, "event_type": event_type, "data": data}
        )

    async def shutdown(self) -> None:
        for client in list(self.clients.values()):
            try:
                await client.connection.close()
            except ConnectionClosed as e:
                logger.debug(f"Client {client.id} already closed: {e}")
        self.clients.clear()
