"""
Session: one display name, one live connection, one pair of registries.

The display name travels as the ``name`` query parameter of the connection
URL; there is no handshake message.  Losing the connection ends the session.
There is no reconnect.
"""

import logging
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import websockets
from websockets.exceptions import ConnectionClosed

from chatsync.config import settings
from chatsync.schemas.room import Room
from chatsync.state.rooms import RoomRegistry
from chatsync.state.users import UserRegistry
from chatsync.websocket.commands import CommandBuilder
from chatsync.websocket.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


class ConnectionLost(Exception):
    """The session's connection is gone; nothing more can be sent."""


class Session:
    def __init__(self, display_name: str, server_url: str | None = None, connection=None) -> None:
        self._display_name = display_name
        self._server_url = server_url or settings.SERVER_URL
        # Anything with async send()/close() and async iteration over frames.
        self._connection = connection
        self._closed = False
        self._rooms = RoomRegistry()
        self._users = UserRegistry()
        self.dispatcher = EventDispatcher(self._rooms, self._users)
        self.commands = CommandBuilder(self._send, self._rooms)

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def rooms(self) -> RoomRegistry:
        return self._rooms

    @property
    def users(self) -> UserRegistry:
        return self._users

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def url(self) -> str:
        """Server URL with the display name set as the ``name`` query parameter."""
        parts = urlsplit(self._server_url)
        query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "name"]
        query.append(("name", self._display_name))
        return urlunsplit(parts._replace(query=urlencode(query)))

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        if self._closed:
            raise ConnectionLost("session already closed")
        if self._connection is not None:
            return
        self._connection = await websockets.connect(
            self.url,
            ping_interval=settings.PING_INTERVAL,
            ping_timeout=settings.PING_TIMEOUT,
            max_size=settings.MAX_FRAME_SIZE,
        )
        logger.info("Connected to %s as %r", self._server_url, self._display_name)

    async def run(self) -> None:
        """Dispatch inbound frames in arrival order until the connection ends."""
        await self.connect()
        try:
            async for frame in self._connection:
                self.dispatcher.dispatch_frame(frame)
        except ConnectionClosed as exc:
            logger.warning("Connection lost: %s", exc)
        else:
            logger.info("Connection closed")
        finally:
            self._closed = True

    async def close(self) -> None:
        self._closed = True
        if self._connection is not None:
            await self._connection.close()

    async def __aenter__(self) -> "Session":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _send(self, frame: str) -> None:
        if self._closed or self._connection is None:
            raise ConnectionLost("session is not connected")
        try:
            await self._connection.send(frame)
        except ConnectionClosed as exc:
            self._closed = True
            raise ConnectionLost(str(exc)) from exc

    # ------------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------------

    async def send_message(self, room: Room) -> bool:
        return await self.commands.send_message(room)

    async def join_room(self, name: str) -> None:
        await self.commands.join_room(name)

    async def join_private_room(self, target_id: str) -> None:
        await self.commands.join_private_room(target_id)

    async def leave_room(self, room: Room) -> None:
        await self.commands.leave_room(room)
