"""Segment extraction from partial JSON streams."""
import json

import pytest

from storysprout.story.extractor import (
    SegmentExtractor,
    decode_string_prefix,
    extract_segment,
    find_field_start,
)


def _feed_all(chunks: list[str]) -> list[str]:
    ex = SegmentExtractor()
    out = []
    for c in chunks:
        piece = ex.feed(c)
        if piece is not None:
            out.append(piece)
    return out


def test_two_chunk_stream_emits_only_new_text() -> None:
    assert _feed_all(['{"beat": 1, "segment": "Once up', 'on a time"}']) == ["Once up", "on a time"]


def test_no_output_before_field_marker() -> None:
    ex = SegmentExtractor()
    assert ex.feed('{"beat": 2, ') is None
    assert ex.state.started is False
    assert ex.feed('"segm') is None
    assert ex.feed('ent": "Hi') == "Hi"
    assert ex.state.started is True


@pytest.mark.parametrize("marker", ['"segment":"', '"segment": "', '"segment" :  "', '"segment":\n  "'])
def test_marker_spacing_variants(marker: str) -> None:
    assert extract_segment("{" + marker + 'Hello"}') == "Hello"


def test_field_absent_returns_empty() -> None:
    assert extract_segment('{"beat": 1, "question": "Where?"}') == ""
    assert find_field_start("not json at all") is None


def test_escapes_are_decoded() -> None:
    raw = '{"segment": "Line one\\nTab\\there \\"quoted\\" back\\\\slash a\\/b"}'
    assert extract_segment(raw) == 'Line one\nTab\there "quoted" back\\slash a/b'


def test_unknown_escape_passes_character_through() -> None:
    assert extract_segment('{"segment": "caf\\u00e9"}') == "cafu00e9"


def test_trailing_backslash_waits_for_next_chunk() -> None:
    ex = SegmentExtractor()
    assert ex.feed('{"segment": "Hi\\') == "Hi"
    assert ex.feed('n there"}') == "\n there"


def test_split_across_closing_quote_stops_at_value_end() -> None:
    chunks = ['{"segment": "The end', '.", "question": null, "options": []}']
    assert "".join(_feed_all(chunks)) == "The end."


def test_decode_stops_at_closing_quote() -> None:
    raw = '"abc" trailing'
    assert decode_string_prefix(raw, 1) == "abc"


def test_concatenation_is_prefix_of_full_value_at_every_step() -> None:
    value = 'Pip said "hello"\nand hopped off\\home.'
    raw = json.dumps({"beat": 3, "segment": value, "question": "Now?", "options": ["a", "b"]})
    ex = SegmentExtractor()
    emitted = ""
    for i in range(len(raw)):
        piece = ex.feed(raw[i])
        if piece:
            emitted += piece
        assert value.startswith(emitted)
    assert emitted == value
    assert ex.text == value
    assert ex.raw == raw


def test_empty_chunks_are_harmless() -> None:
    assert _feed_all(["", '{"segment": "a', "", 'b"}', ""]) == ["a", "b"]
