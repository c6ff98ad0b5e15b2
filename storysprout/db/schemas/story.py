"""Story and beat DTOs (what leaves a session)."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from storysprout.db.models.story import Story, StoryBeat
from storysprout.db.utils import json_list


class PersistedBeat(BaseModel):
    """A saved beat. chosen_option is filled in once, when the next beat is requested."""

    model_config = ConfigDict(frozen=True)

    id: str
    beat_number: int
    segment: str
    question: str | None = None
    options: list[str] = Field(default_factory=list)
    chosen_option: str | None = None
    provider: str
    raw_json: str | None = None

    @classmethod
    def from_row(cls, row: StoryBeat) -> "PersistedBeat":
        return cls(
            id=row.id,
            beat_number=row.beat_number,
            segment=row.segment,
            question=row.question,
            options=json_list(row.options_json),
            chosen_option=row.chosen_option,
            provider=row.provider,
            raw_json=row.raw_json,
        )

    def to_wire(self) -> dict:
        """camelCase shape sent in the stream's complete event."""
        return {
            "id": self.id,
            "beatNumber": self.beat_number,
            "segment": self.segment,
            "question": self.question,
            "options": list(self.options),
            "chosenOption": self.chosen_option,
            "provider": self.provider,
            "rawJson": self.raw_json,
        }


class StoryContext(BaseModel):
    """Story state the prompt builder and beat engine read; beats ordered by beat_number."""

    id: str
    current_beat: int
    is_complete: bool
    style_slug: str
    style_name: str
    theme_name: str
    beats: list[PersistedBeat] = Field(default_factory=list)

    @property
    def next_beat_number(self) -> int:
        return len(self.beats) + 1

    @classmethod
    def from_row(cls, row: Story) -> "StoryContext":
        return cls(
            id=row.id,
            current_beat=row.current_beat,
            is_complete=row.is_complete,
            style_slug=row.style.slug,
            style_name=row.style.name,
            theme_name=row.theme.name,
            beats=[PersistedBeat.from_row(b) for b in row.beats],
        )
