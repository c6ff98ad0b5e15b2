"""Story engine exceptions. Validation failures share one base so the engine can retry on any of them."""


class StoryError(Exception):
    """Base exception for story engine failures."""

    def __init__(self, message: str, *, code: str = "STORY_ERROR") -> None:
        super().__init__(message)
        self.code = code


class StoryNotFoundError(StoryError):
    def __init__(self, story_id: str) -> None:
        super().__init__(f"Story not found: {story_id}", code="STORY_NOT_FOUND")
        self.story_id = story_id


class StoryCompleteError(StoryError):
    def __init__(self, story_id: str) -> None:
        super().__init__("Story is already complete", code="STORY_COMPLETE")
        self.story_id = story_id


class BeatValidationError(StoryError):
    """A beat response was rejected by the validation pipeline."""

    def __init__(self, message: str, *, code: str = "BEAT_INVALID") -> None:
        super().__init__(message, code=code)


class InvalidJSONError(BeatValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_JSON")


class SchemaError(BeatValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="SCHEMA")


class StructuralError(BeatValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="STRUCTURE")


class ContentSafetyError(BeatValidationError):
    def __init__(self, message: str, *, term: str) -> None:
        super().__init__(message, code="CONTENT_SAFETY")
        self.term = term
