import logging

from chatsync.protocol import codec
from chatsync.schemas.event import (
    EventRecord,
    RoomJoinedEvent,
    SendMessageEvent,
    UserJoinedEvent,
    UserLeftEvent,
)
from chatsync.schemas.room import Message, Room
from chatsync.state.rooms import RoomRegistry
from chatsync.state.users import UserRegistry

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Applies decoded server events, in order, to the room and user registries.

    Every event is handled or dropped; nothing raised by a single event stops
    the rest of the frame from being applied.
    """

    def __init__(self, rooms: RoomRegistry, users: UserRegistry) -> None:
        self._rooms = rooms
        self._users = users

    def dispatch_frame(self, frame: str | bytes) -> int:
        """Decode *frame* and dispatch each event.  Returns the number of events dispatched."""
        records = codec.decode(frame)
        for event in records:
            self.dispatch(event)
        return len(records)

    def dispatch(self, event: EventRecord) -> None:
        try:
            if isinstance(event, UserJoinedEvent):
                self._users.add(event.sender)
            elif isinstance(event, UserLeftEvent):
                self._users.remove_by_id(event.sender.id)
            elif isinstance(event, RoomJoinedEvent):
                self._handle_room_joined(event)
            elif isinstance(event, SendMessageEvent):
                self._handle_chat_message(event)
            else:
                logger.debug("Ignoring unrecognized action %r", event.action)
        except Exception as exc:
            logger.error("Error handling event %r: %s", getattr(event, "action", None), exc, exc_info=True)

    def _handle_room_joined(self, event: RoomJoinedEvent) -> None:
        target = event.target
        # Private rooms are named after the other participant.
        if target.private and event.sender is not None:
            name = event.sender.name
        else:
            name = target.name
        self._rooms.add(Room(id=target.id, name=name, private=target.private, messages=[]))

    def _handle_chat_message(self, event: SendMessageEvent) -> None:
        message = Message(sender=event.sender, target_room_id=event.target.id, text=event.message)
        if not self._rooms.append_message(event.target.id, message):
            logger.debug("Dropping message for unknown room %s", event.target.id)
