"""Story and StoryBeat repositories. Session-bound per call; callers own the transaction."""
from sqlalchemy import select
from sqlalchemy.orm import Session

from storysprout.db.exceptions import NotFoundError
from storysprout.db.models.story import Story, StoryBeat
from storysprout.db.schemas.story import PersistedBeat, StoryContext
from storysprout.db.utils import json_serialize, wrap_integrity_error


class StoryRepo:
    def create(self, session: Session, style_id: str, theme_id: str) -> Story:
        story = Story(style_id=style_id, theme_id=theme_id, current_beat=0, is_complete=False)
        session.add(story)
        session.flush()
        return story

    def get(self, session: Session, story_id: str) -> Story | None:
        return session.get(Story, story_id)

    def get_context(self, session: Session, story_id: str) -> StoryContext | None:
        row = self.get(session, story_id)
        return StoryContext.from_row(row) if row else None

    def mark_progress(self, session: Session, story_id: str, current_beat: int, is_complete: bool) -> None:
        """Last write wins: beat numbers only move forward and the caller sequences requests."""
        story = self.get(session, story_id)
        if story is None:
            raise NotFoundError(f"Story not found: {story_id}")
        story.current_beat = current_beat
        story.is_complete = is_complete
        session.flush()


class BeatRepo:
    @wrap_integrity_error
    def create(
        self,
        session: Session,
        story_id: str,
        beat_number: int,
        segment: str,
        question: str | None,
        options: list[str],
        provider: str,
        raw_json: str | None = None,
    ) -> PersistedBeat:
        if session.get(Story, story_id) is None:
            raise NotFoundError(f"Story not found: {story_id}")
        beat = StoryBeat(
            story_id=story_id,
            beat_number=beat_number,
            segment=segment,
            question=question,
            options_json=json_serialize(list(options)),
            provider=provider,
            raw_json=raw_json,
        )
        session.add(beat)
        session.flush()
        return PersistedBeat.from_row(beat)

    def last_beat(self, session: Session, story_id: str) -> StoryBeat | None:
        return session.execute(
            select(StoryBeat)
            .where(StoryBeat.story_id == story_id)
            .order_by(StoryBeat.beat_number.desc())
            .limit(1)
        ).scalar_one_or_none()

    def set_chosen_option(self, session: Session, beat_id: str, chosen_option: str) -> None:
        beat = session.get(StoryBeat, beat_id)
        if beat is None:
            raise NotFoundError(f"Beat not found: {beat_id}")
        beat.chosen_option = chosen_option
        session.flush()
