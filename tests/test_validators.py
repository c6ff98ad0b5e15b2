"""Beat validation pipeline: JSON -> schema -> structure -> content safety."""
import json

import pytest

from storysprout.story.errors import ContentSafetyError, InvalidJSONError, SchemaError, StructuralError
from storysprout.story.safety import DEFAULT_DENYLIST, Denylist
from storysprout.story.validators import (
    count_words,
    parse_beat_response,
    strip_code_fences,
    validate_beat_response,
)


@pytest.mark.parametrize("beat", [1, 2, 3, 4])
def test_middle_beats_accept_question_and_two_options(beat_json, beat) -> None:
    result = validate_beat_response(beat_json(beat), beat)
    assert result.ok
    assert result.data.beat == beat
    assert result.data.options == ["Visit the duck pond", "Pick some berries"]


def test_final_beat_accepts_null_question_and_no_options(beat_json) -> None:
    result = validate_beat_response(beat_json(5), 5)
    assert result.ok
    assert result.data.question is None
    assert result.data.options == []


def test_missing_question_is_read_as_null(make_segment) -> None:
    raw = json.dumps({"beat": 5, "segment": make_segment(50), "options": []})
    assert validate_beat_response(raw, 5).ok


def test_code_fences_are_stripped(beat_json) -> None:
    body = beat_json(2)
    assert validate_beat_response(f"```json\n{body}\n```", 2).ok
    assert validate_beat_response(f"```\n{body}\n```", 2).ok
    assert strip_code_fences("  ```JSON\n{}\n```  ") == "{}"


def test_invalid_json_message_carries_excerpt() -> None:
    result = validate_beat_response("not json at all", 1)
    assert not result.ok
    assert result.code == "INVALID_JSON"
    assert result.error == "Invalid JSON: not json at all"


def test_invalid_json_excerpt_is_truncated() -> None:
    raw = "x" * 500
    with pytest.raises(InvalidJSONError) as exc:
        parse_beat_response(raw, 1)
    assert str(exc.value) == "Invalid JSON: " + "x" * 200


@pytest.mark.parametrize(
    "payload,fragment",
    [
        ({"segment": "hi", "question": "q", "options": []}, "beat"),
        ({"beat": "1", "segment": "hi", "question": "q", "options": []}, "beat"),
        ({"beat": 1, "segment": "", "question": "q", "options": []}, "segment"),
        ({"beat": 6, "segment": "hi", "question": "q", "options": []}, "beat"),
        ({"beat": 1, "segment": "hi", "question": "q", "options": [1, 2]}, "options.0"),
        ({"beat": 1, "segment": "hi", "question": "q"}, "options"),
    ],
)
def test_schema_failures(payload, fragment) -> None:
    with pytest.raises(SchemaError) as exc:
        parse_beat_response(json.dumps(payload), 1)
    msg = str(exc.value)
    assert msg.startswith("Schema validation failed: ")
    assert fragment in msg


def test_schema_rejects_non_object() -> None:
    result = validate_beat_response("[1, 2, 3]", 1)
    assert result.code == "SCHEMA"


def test_beat_number_mismatch(beat_json) -> None:
    result = validate_beat_response(beat_json(3), 2)
    assert result.error == "Expected beat 2, got beat 3"
    assert result.code == "STRUCTURE"


def test_middle_beat_requires_question(beat_json) -> None:
    result = validate_beat_response(beat_json(2, question=None), 2)
    assert result.error == "Beat 2 must include a question"


@pytest.mark.parametrize("options", [[], ["one"], ["a", "b", "c"]])
def test_middle_beat_requires_exactly_two_options(beat_json, options) -> None:
    result = validate_beat_response(beat_json(4, options=options), 4)
    assert result.error == f"Beat 4 must have exactly 2 options, got {len(options)}"


def test_final_beat_rejects_question(beat_json) -> None:
    result = validate_beat_response(beat_json(5, question="Again?"), 5)
    assert result.error == "Beat 5 should not have a question"


def test_final_beat_rejects_options(beat_json) -> None:
    result = validate_beat_response(beat_json(5, options=["more"]), 5)
    assert result.error == "Beat 5 should not have options"


@pytest.mark.parametrize(
    "words,error",
    [
        (39, "Segment too short: 39 words (minimum 40)"),
        (40, None),
        (160, None),
        (161, "Segment too long: 161 words (maximum 160)"),
    ],
)
def test_word_band_is_inclusive(beat_json, words, error) -> None:
    result = validate_beat_response(beat_json(1, words=words), 1)
    assert result.error == error


def test_custom_word_band(beat_json) -> None:
    assert validate_beat_response(beat_json(1, words=10), 1, min_words=5, max_words=20).ok
    with pytest.raises(StructuralError):
        parse_beat_response(beat_json(1, words=21), 1, min_words=5, max_words=20)


def test_count_words_splits_on_any_whitespace() -> None:
    assert count_words("  one\ttwo\nthree   four ") == 4
    assert count_words("") == 0


def test_blocked_word_in_segment(beat_json, make_segment) -> None:
    segment = make_segment(50) + " a scary shadow"
    result = validate_beat_response(beat_json(1, segment=segment), 1)
    assert result.code == "CONTENT_SAFETY"
    assert result.error == 'Content safety violation: blocked word "scary"'


def test_blocked_word_in_options_and_question(beat_json) -> None:
    with pytest.raises(ContentSafetyError) as exc:
        parse_beat_response(beat_json(2, options=["Hug a tree", "Fight the wind"]), 2)
    assert exc.value.term == "fight"
    result = validate_beat_response(beat_json(2, question="Is Pip alone?"), 2)
    assert result.error == 'Content safety violation: blocked word "alone"'


def test_whole_word_matching_only(beat_json, make_segment) -> None:
    segment = make_segment(50) + " painting skills and a killer whale diet"
    assert validate_beat_response(beat_json(1, segment=segment), 1).ok


def test_matching_ignores_case(beat_json, make_segment) -> None:
    segment = make_segment(50) + " a GHOST story"
    assert validate_beat_response(beat_json(1, segment=segment), 1).error.endswith('"ghost"')


def test_first_listed_term_wins() -> None:
    # "dark" is listed after "monster" even though it appears first in the text
    assert DEFAULT_DENYLIST.first_match("the dark monster") == "monster"


def test_custom_denylist(beat_json, make_segment) -> None:
    segment = make_segment(50) + " with broccoli"
    denylist = Denylist(["broccoli"])
    result = validate_beat_response(beat_json(1, segment=segment), 1, denylist=denylist)
    assert result.error == 'Content safety violation: blocked word "broccoli"'


def test_denylist_extend_keeps_order_and_dedupes() -> None:
    base = Denylist(["one", "Two"])
    extended = base.extend(["two", "three"])
    assert extended.terms == ("one", "two", "three")
    assert "THREE" in extended
    assert len(base) == 2


def test_stages_stop_at_first_failure(beat_json, make_segment) -> None:
    # wrong beat number and a blocked word: structure runs before safety
    raw = beat_json(3, segment=make_segment(50) + " monster")
    result = validate_beat_response(raw, 1)
    assert result.code == "STRUCTURE"
