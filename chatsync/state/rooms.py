import logging
from collections.abc import Iterator

from chatsync.schemas.room import Message, Room

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Rooms the local session has joined, keyed by room id.

    Rooms are only ever added from a server ``room-joined`` confirmation.
    Removal happens locally on leave and goes by name, the same key the
    ``leave-room`` command uses on the wire.  Names are not unique across
    rooms, so only the first match (in join order) is removed.
    """

    def __init__(self) -> None:
        # room_id -> Room, in join order
        self._rooms: dict[str, Room] = {}

    def add(self, room: Room) -> bool:
        """Insert *room*.  Returns False (and keeps the existing room) if the id is known."""
        if room.id in self._rooms:
            logger.debug("Room %s already joined, ignoring", room.id)
            return False
        self._rooms[room.id] = room
        logger.info("Joined room %r (%s)", room.name, room.id)
        return True

    def remove_by_name(self, name: str) -> Room | None:
        for room_id, room in self._rooms.items():
            if room.name == name:
                del self._rooms[room_id]
                logger.info("Left room %r (%s)", name, room_id)
                return room
        return None

    def find_by_id(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    def find_by_name(self, name: str) -> Room | None:
        return next((r for r in self._rooms.values() if r.name == name), None)

    def append_message(self, room_id: str, message: Message) -> bool:
        """Append *message* to the room's history.  Returns False if the room is unknown."""
        room = self._rooms.get(room_id)
        if room is None:
            return False
        room.messages.append(message)
        return True

    def list(self) -> tuple[Room, ...]:
        return tuple(self._rooms.values())

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __iter__(self) -> Iterator[Room]:
        return iter(self.list())
