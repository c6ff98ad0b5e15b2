"""
Story beat engine: segment extraction, beat validation, prompts, and the streaming orchestrator.
Public API: BeatRequestService, BeatOrchestrator, SegmentExtractor, validate_beat_response.
"""
from storysprout.story.engine import BeatOrchestrator, BeatRequestService, BeatState
from storysprout.story.errors import (
    BeatValidationError,
    ContentSafetyError,
    InvalidJSONError,
    SchemaError,
    StoryCompleteError,
    StoryError,
    StoryNotFoundError,
    StructuralError,
)
from storysprout.story.events import Complete, Done, Error, StreamEvent, TextChunk, encode_sse
from storysprout.story.extractor import SegmentExtractor, extract_segment
from storysprout.story.prompts import PromptBundle, PromptContextBuilder
from storysprout.story.safety import DEFAULT_DENYLIST, Denylist
from storysprout.story.schema import BeatResponse
from storysprout.story.settings import StorySettings
from storysprout.story.validators import BeatValidationResult, parse_beat_response, validate_beat_response

__all__ = [
    "BeatOrchestrator",
    "BeatRequestService",
    "BeatState",
    "BeatResponse",
    "BeatValidationResult",
    "validate_beat_response",
    "parse_beat_response",
    "SegmentExtractor",
    "extract_segment",
    "PromptContextBuilder",
    "PromptBundle",
    "Denylist",
    "DEFAULT_DENYLIST",
    "StorySettings",
    "StreamEvent",
    "TextChunk",
    "Complete",
    "Error",
    "Done",
    "encode_sse",
    "StoryError",
    "StoryNotFoundError",
    "StoryCompleteError",
    "BeatValidationError",
    "InvalidJSONError",
    "SchemaError",
    "StructuralError",
    "ContentSafetyError",
]
