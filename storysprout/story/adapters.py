"""SqlStoryStore: implements StoryStorePort with storysprout.db repositories, one session per call."""
from __future__ import annotations

import logging

from storysprout.db.repositories.story_repo import BeatRepo, StoryRepo
from storysprout.db.schemas.story import PersistedBeat, StoryContext
from storysprout.db.session import session_scope
from storysprout.story.schema import FINAL_BEAT

logger = logging.getLogger(__name__)


class SqlStoryStore:
    def __init__(self) -> None:
        self._stories = StoryRepo()
        self._beats = BeatRepo()

    def load_story(self, story_id: str) -> StoryContext | None:
        with session_scope() as session:
            return self._stories.get_context(session, story_id)

    def record_choice(self, story_id: str, chosen_option: str) -> None:
        with session_scope() as session:
            last = self._beats.last_beat(session, story_id)
            if last is None:
                return
            self._beats.set_chosen_option(session, last.id, chosen_option)
            logger.debug("choice recorded story_id=%s beat=%s", story_id, last.beat_number)

    def persist_beat(
        self,
        story_id: str,
        beat_number: int,
        data: dict,
        provider: str,
        raw_text: str,
    ) -> PersistedBeat:
        with session_scope() as session:
            beat = self._beats.create(
                session,
                story_id=story_id,
                beat_number=beat_number,
                segment=data["segment"],
                question=data.get("question"),
                options=data.get("options") or [],
                provider=provider,
                raw_json=raw_text,
            )
            self._stories.mark_progress(session, story_id, beat_number, beat_number == FINAL_BEAT)
            return beat

    def mark_story(self, story_id: str, current_beat: int, is_complete: bool) -> None:
        with session_scope() as session:
            self._stories.mark_progress(session, story_id, current_beat, is_complete)
