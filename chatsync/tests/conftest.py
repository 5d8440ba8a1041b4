"""
Pytest fixtures shared across all test modules.
The websocket is replaced by an in-memory fake, so no chat server is needed.
"""

import json

import pytest
from websockets.exceptions import ConnectionClosedError

from chatsync.state.rooms import RoomRegistry
from chatsync.state.users import UserRegistry
from chatsync.websocket.dispatcher import EventDispatcher
from chatsync.websocket.session import Session


class FakeWebSocket:
    """Minimal stand-in for a websockets client connection.

    Yields the queued inbound frames, then either ends cleanly or raises
    ConnectionClosedError when ``drop`` is set.
    """

    def __init__(self, frames=None, drop: bool = False):
        self.frames: list = list(frames or [])
        self.sent: list[str] = []
        self.drop = drop
        self.closed = False

    async def send(self, frame: str):
        if self.closed:
            raise ConnectionClosedError(None, None)
        self.sent.append(frame)

    async def close(self):
        self.closed = True

    async def __aiter__(self):
        for frame in self.frames:
            yield frame
        if self.drop:
            self.closed = True
            raise ConnectionClosedError(None, None)

    def sent_json(self) -> list[dict]:
        return [json.loads(f) for f in self.sent]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def rooms():
    return RoomRegistry()


@pytest.fixture()
def users():
    return UserRegistry()


@pytest.fixture()
def dispatcher(rooms, users):
    return EventDispatcher(rooms, users)


@pytest.fixture()
def fake_ws():
    return FakeWebSocket()


@pytest.fixture()
def session(fake_ws):
    return Session("alice", server_url="ws://chat.test/ws", connection=fake_ws)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def user(user_id: str, name: str | None = None) -> dict:
    return {"id": user_id, "name": name or user_id}


def user_join(user_id: str, name: str | None = None) -> str:
    return json.dumps({"action": "user-join", "message": "", "target": None, "sender": user(user_id, name)})


def user_left(user_id: str, name: str | None = None) -> str:
    return json.dumps({"action": "user-left", "message": "", "target": None, "sender": user(user_id, name)})


def room_joined(room_id: str, name: str, private: bool = False, sender: dict | None = None) -> str:
    # The server sends "sender": null when confirming a public room.
    return json.dumps(
        {
            "action": "room-joined",
            "message": "",
            "target": {"id": room_id, "name": name, "private": private},
            "sender": sender,
        }
    )


def chat_message(room_id: str, text: str, sender: dict | None = None, room_name: str = "") -> str:
    return json.dumps(
        {
            "action": "send-message",
            "message": text,
            "target": {"id": room_id, "name": room_name},
            "sender": sender or user("u1", "bob"),
        }
    )


def frame(*segments: str) -> str:
    return "\n".join(segments)
