"""
Inbound event records.

Every decoded segment becomes exactly one variant of ``EventRecord``.  The
variant is picked from the ``action`` field; any action this client does not
handle (or a missing one) maps to ``UnrecognizedEvent`` so newer servers can
add actions without breaking older clients.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Tag, TypeAdapter

from chatsync.core import events
from chatsync.schemas.room import RoomRef
from chatsync.schemas.user import UserRef

UNRECOGNIZED = "unrecognized"


class SendMessageEvent(BaseModel):
    action: Literal[events.SEND_MESSAGE]
    message: str = ""
    target: RoomRef
    sender: UserRef


class UserJoinedEvent(BaseModel):
    action: Literal[events.USER_JOINED]
    sender: UserRef


class UserLeftEvent(BaseModel):
    action: Literal[events.USER_LEFT]
    sender: UserRef


class RoomJoinedEvent(BaseModel):
    action: Literal[events.ROOM_JOINED]
    target: RoomRef
    # Public room confirmations carry "sender": null
    sender: UserRef | None = None


class UnrecognizedEvent(BaseModel):
    action: Any = None

    model_config = {"extra": "allow"}


def _action_tag(value: Any) -> str:
    if isinstance(value, dict):
        action = value.get("action")
    else:
        action = getattr(value, "action", None)
    if isinstance(action, str) and action in events.INBOUND_ACTIONS:
        return action
    return UNRECOGNIZED


EventRecord = Annotated[
    Union[
        Annotated[SendMessageEvent, Tag(events.SEND_MESSAGE)],
        Annotated[UserJoinedEvent, Tag(events.USER_JOINED)],
        Annotated[UserLeftEvent, Tag(events.USER_LEFT)],
        Annotated[RoomJoinedEvent, Tag(events.ROOM_JOINED)],
        Annotated[UnrecognizedEvent, Tag(UNRECOGNIZED)],
    ],
    Discriminator(_action_tag),
]

event_adapter: TypeAdapter[EventRecord] = TypeAdapter(EventRecord)
