"""
Wire codec.

The server batches queued events into a single websocket frame, one JSON
object per line.  ``decode`` splits a frame back into ordered event records;
a bad line is skipped without affecting its neighbours.  ``encode`` always
produces exactly one object per outbound frame.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from chatsync.schemas.event import EventRecord, event_adapter

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")
_LINE_BREAK_BYTES = re.compile(rb"\r?\n")


class MalformedEvent(ValueError):
    """A single frame segment could not be turned into an event record."""

    def __init__(self, segment: str | bytes, reason: str) -> None:
        super().__init__(f"malformed event: {reason}")
        self.segment = segment
        self.reason = reason


def split_frame(frame: str | bytes) -> list[str | bytes]:
    """Split a frame on newlines, keeping arrival order and dropping blank lines."""
    pattern = _LINE_BREAK_BYTES if isinstance(frame, bytes) else _LINE_BREAK
    return [segment for segment in pattern.split(frame) if segment.strip()]


def decode_segment(segment: str | bytes) -> EventRecord:
    """Parse one segment.  Raises MalformedEvent if it is not a valid event."""
    if isinstance(segment, bytes):
        try:
            text = segment.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedEvent(segment, "invalid UTF-8") from exc
    else:
        text = segment

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedEvent(segment, f"invalid JSON ({exc.msg})") from exc

    if not isinstance(data, dict):
        raise MalformedEvent(segment, "not a JSON object")

    try:
        return event_adapter.validate_python(data)
    except ValidationError as exc:
        raise MalformedEvent(segment, f"invalid {data.get('action')!r} payload") from exc


def decode(frame: str | bytes) -> list[EventRecord]:
    """Decode every segment of *frame*, skipping (and logging) malformed ones."""
    records: list[EventRecord] = []
    for segment in split_frame(frame):
        try:
            records.append(decode_segment(segment))
        except MalformedEvent as exc:
            logger.warning("Skipping segment (%s): %r", exc, exc.segment[:200])
    return records


def encode(action: str, payload: dict[str, Any] | None = None) -> str:
    """Serialize one outbound action as a single compact JSON object."""
    payload = payload or {}
    if "action" in payload:
        raise ValueError("payload must not carry its own 'action'")
    return json.dumps({"action": action, **payload}, separators=(",", ":"), ensure_ascii=False)
