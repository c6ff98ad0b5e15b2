"""Storage protocol the beat engine depends on (not the SQLAlchemy implementation)."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from storysprout.db.schemas.story import PersistedBeat, StoryContext


@runtime_checkable
class StoryStorePort(Protocol):
    """Synchronous story persistence. Each call is its own transaction."""

    def load_story(self, story_id: str) -> StoryContext | None:
        ...

    def record_choice(self, story_id: str, chosen_option: str) -> None:
        """Attach the child's choice to the story's latest beat."""
        ...

    def persist_beat(
        self,
        story_id: str,
        beat_number: int,
        data: dict,
        provider: str,
        raw_text: str,
    ) -> PersistedBeat:
        """Create the beat record and advance the story to it in one transaction.

        data holds segment, question, options. The story becomes complete with the final beat.
        """
        ...

    def mark_story(self, story_id: str, current_beat: int, is_complete: bool) -> None:
        """Set progress directly (seeding, admin resets)."""
        ...
