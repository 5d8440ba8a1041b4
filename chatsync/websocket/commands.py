from collections.abc import Awaitable, Callable

from chatsync.core import events
from chatsync.protocol import codec
from chatsync.schemas.room import Room
from chatsync.state.rooms import RoomRegistry

Send = Callable[[str], Awaitable[None]]


class CommandBuilder:
    """Turns local user intents into outbound frames, one frame per intent.

    Nothing waits for the server: a sent message clears the draft straight
    away and a leave removes the room from the registry straight away.
    """

    def __init__(self, send: Send, rooms: RoomRegistry) -> None:
        self._send = send
        self._rooms = rooms

    async def send_message(self, room: Room) -> bool:
        """Send the room's draft, if any.  Returns True if a frame went out."""
        if not room.draft:
            return False
        await self._send(codec.encode(events.SEND_MESSAGE, {"message": room.draft, "target": room.ref()}))
        room.draft = ""
        return True

    async def join_room(self, name: str) -> None:
        if not name:
            raise ValueError("Room name must not be empty")
        await self._send(codec.encode(events.JOIN_ROOM, {"message": name}))

    async def join_private_room(self, target_id: str) -> None:
        """Ask the server for a private room with the user or room *target_id*."""
        if not target_id:
            raise ValueError("Target id must not be empty")
        await self._send(codec.encode(events.JOIN_ROOM_PRIVATE, {"message": target_id}))

    async def leave_room(self, room: Room) -> None:
        await self._send(codec.encode(events.LEAVE_ROOM, {"message": room.name}))
        self._rooms.remove_by_name(room.name)
