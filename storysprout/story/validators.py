"""Beat response validation: JSON recovery -> schema -> beat structure -> content safety.

Stages run in order and stop at the first failure. Nothing is retried here; the engine decides.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass

from pydantic import ValidationError

from storysprout.story.errors import (
    BeatValidationError,
    ContentSafetyError,
    InvalidJSONError,
    SchemaError,
    StructuralError,
)
from storysprout.story.safety import DEFAULT_DENYLIST, Denylist
from storysprout.story.schema import FINAL_BEAT, BeatResponse

DEFAULT_MIN_WORDS = 40
DEFAULT_MAX_WORDS = 160
RAW_EXCERPT_CHARS = 200

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


@dataclass(frozen=True)
class BeatValidationResult:
    """Either data (validated beat) or error (one message naming the failed stage)."""

    data: BeatResponse | None = None
    error: str | None = None
    code: str | None = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def strip_code_fences(raw: str) -> str:
    """Remove a leading ``` / ```json fence and a trailing ``` fence, then trim."""
    text = raw.strip()
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def parse_json(raw: str) -> object:
    try:
        return json.loads(strip_code_fences(raw))
    except ValueError as e:
        raise InvalidJSONError(f"Invalid JSON: {raw[:RAW_EXCERPT_CHARS]}") from e


def _format_issues(err: ValidationError) -> str:
    issues = []
    for issue in err.errors():
        loc = ".".join(str(p) for p in issue["loc"]) or "(root)"
        issues.append(f"{loc}: {issue['msg']}")
    return "; ".join(issues)


def validate_schema(parsed: object) -> BeatResponse:
    try:
        return BeatResponse.model_validate(parsed)
    except ValidationError as e:
        raise SchemaError(f"Schema validation failed: {_format_issues(e)}") from e


def count_words(text: str) -> int:
    return len(text.split())


def validate_beat_structure(
    data: BeatResponse,
    expected_beat: int,
    *,
    min_words: int = DEFAULT_MIN_WORDS,
    max_words: int = DEFAULT_MAX_WORDS,
) -> None:
    """Beat-position rules plus the segment word band. Raises StructuralError."""
    if data.beat != expected_beat:
        raise StructuralError(f"Expected beat {expected_beat}, got beat {data.beat}")

    if expected_beat < FINAL_BEAT:
        if not data.question:
            raise StructuralError(f"Beat {expected_beat} must include a question")
        if len(data.options) != 2:
            raise StructuralError(
                f"Beat {expected_beat} must have exactly 2 options, got {len(data.options)}"
            )
    else:
        if data.question is not None:
            raise StructuralError(f"Beat {FINAL_BEAT} should not have a question")
        if data.options:
            raise StructuralError(f"Beat {FINAL_BEAT} should not have options")

    words = count_words(data.segment)
    if words < min_words:
        raise StructuralError(f"Segment too short: {words} words (minimum {min_words})")
    if words > max_words:
        raise StructuralError(f"Segment too long: {words} words (maximum {max_words})")


def check_content_safety(data: BeatResponse, denylist: Denylist = DEFAULT_DENYLIST) -> None:
    """Scan segment, question and options together. Raises ContentSafetyError on the first listed term."""
    text = " ".join([data.segment, data.question or "", *data.options]).lower()
    term = denylist.first_match(text)
    if term is not None:
        raise ContentSafetyError(f'Content safety violation: blocked word "{term}"', term=term)


def parse_beat_response(
    raw: str,
    expected_beat: int,
    *,
    min_words: int | None = None,
    max_words: int | None = None,
    denylist: Denylist | None = None,
) -> BeatResponse:
    """Run all four stages. Returns the beat or raises a BeatValidationError subclass."""
    parsed = parse_json(raw)
    data = validate_schema(parsed)
    validate_beat_structure(
        data,
        expected_beat,
        min_words=DEFAULT_MIN_WORDS if min_words is None else min_words,
        max_words=DEFAULT_MAX_WORDS if max_words is None else max_words,
    )
    check_content_safety(data, denylist or DEFAULT_DENYLIST)
    return data


def validate_beat_response(
    raw: str,
    expected_beat: int,
    *,
    min_words: int | None = None,
    max_words: int | None = None,
    denylist: Denylist | None = None,
) -> BeatValidationResult:
    """Non-raising variant of parse_beat_response."""
    try:
        data = parse_beat_response(
            raw,
            expected_beat,
            min_words=min_words,
            max_words=max_words,
            denylist=denylist,
        )
    except BeatValidationError as e:
        return BeatValidationResult(error=str(e), code=e.code)
    return BeatValidationResult(data=data)
