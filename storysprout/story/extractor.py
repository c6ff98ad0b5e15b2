"""
Incremental extraction of one JSON string field from a growing raw buffer.

The model streams JSON like {"beat": 1, "segment": "Once upon...", ...}. Readers should see the
story text, not the JSON, so each new chunk re-scans the whole buffer from the field marker and
only the decoded suffix not yet emitted is returned. Re-scanning keeps partial escape sequences
at chunk edges simple to get right; buffers are a few hundred words.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

SEGMENT_FIELD = "segment"

_ESCAPES = {
    '"': '"',
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    "/": "/",
}


@lru_cache(maxsize=8)
def _marker_pattern(field: str) -> re.Pattern[str]:
    return re.compile(rf'"{re.escape(field)}"\s*:\s*"')


def find_field_start(raw: str, field: str = SEGMENT_FIELD) -> int | None:
    """Index just past the opening quote of the field's value, or None if not present yet."""
    match = _marker_pattern(field).search(raw)
    return match.end() if match else None


def decode_string_prefix(raw: str, start: int) -> str:
    """Decode a JSON string body from start up to its closing quote or the end of the buffer.

    A backslash that is the last available character stops the scan: the escape is not decodable
    until the next chunk arrives. Unknown escapes pass the escaped character through.
    """
    out: list[str] = []
    i = start
    n = len(raw)
    while i < n:
        ch = raw[i]
        if ch == "\\":
            if i + 1 >= n:
                break
            nxt = raw[i + 1]
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
        elif ch == '"':
            break
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def extract_segment(raw: str, field: str = SEGMENT_FIELD) -> str:
    """One-pass decode of the field value in raw (empty if the field never appears)."""
    start = find_field_start(raw, field)
    if start is None:
        return ""
    return decode_string_prefix(raw, start)


@dataclass
class ExtractorState:
    started: bool = False
    emitted_length: int = 0
    accumulated_raw: str = ""


class SegmentExtractor:
    """Feeds raw chunks and returns newly decodable field text. One instance per stream."""

    def __init__(self, field: str = SEGMENT_FIELD) -> None:
        self.field = field
        self.state = ExtractorState()

    @property
    def raw(self) -> str:
        return self.state.accumulated_raw

    @property
    def text(self) -> str:
        """Everything decoded from the buffer so far."""
        return extract_segment(self.state.accumulated_raw, self.field)

    def feed(self, chunk: str) -> str | None:
        """Append chunk; return the decoded text not emitted before, or None."""
        st = self.state
        st.accumulated_raw += chunk
        start = find_field_start(st.accumulated_raw, self.field)
        if start is None:
            return None
        st.started = True
        decoded = decode_string_prefix(st.accumulated_raw, start)
        if len(decoded) <= st.emitted_length:
            return None
        fragment = decoded[st.emitted_length:]
        st.emitted_length = len(decoded)
        return fragment
