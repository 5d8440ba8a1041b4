from pydantic import BaseModel

from chatsync.schemas.user import UserRef


class RoomRef(BaseModel):
    """Room as carried in the ``target`` field of a frame."""

    id: str
    name: str = ""
    private: bool = False

    model_config = {"coerce_numbers_to_str": True}


class Message(BaseModel):
    sender: UserRef
    target_room_id: str
    text: str

    model_config = {"frozen": True}


class Room(BaseModel):
    """Local view of a joined room: its history and the unsent draft."""

    id: str
    name: str
    private: bool = False
    messages: list[Message] = []
    draft: str = ""

    def ref(self) -> dict[str, str]:
        """Wire form used as the ``target`` of outbound messages."""
        return {"id": self.id, "name": self.name}
