"""Beat stream events and their server-sent-event encoding.

Order on the wire: TextChunk*, then exactly one of Complete / Error, then Done.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Union

from storysprout.db.schemas.story import PersistedBeat

DONE_SENTINEL = "[DONE]"


@dataclass(frozen=True)
class TextChunk:
    text: str


@dataclass(frozen=True)
class Complete:
    beat: PersistedBeat


@dataclass(frozen=True)
class Error:
    message: str


@dataclass(frozen=True)
class Done:
    pass


StreamEvent = Union[TextChunk, Complete, Error, Done]


def event_payload(event: StreamEvent) -> str:
    """The text after `data: ` for one event."""
    if isinstance(event, TextChunk):
        return json.dumps(event.text)
    if isinstance(event, Complete):
        return json.dumps({"type": "complete", "beat": event.beat.to_wire()})
    if isinstance(event, Error):
        return json.dumps({"type": "error", "message": event.message})
    if isinstance(event, Done):
        return DONE_SENTINEL
    raise TypeError(f"Not a stream event: {type(event).__name__}")


def encode_sse(event: StreamEvent) -> str:
    return f"data: {event_payload(event)}\n\n"


def decode_sse(body: str) -> list[object]:
    """Parse a full SSE body back into payloads (JSON values, DONE_SENTINEL kept as a string)."""
    out: list[object] = []
    for line in body.split("\n"):
        if not line.startswith("data: "):
            continue
        data = line[len("data: "):]
        out.append(DONE_SENTINEL if data == DONE_SENTINEL else json.loads(data))
    return out
