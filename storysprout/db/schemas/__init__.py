"""Pydantic DTOs for DB entities."""
from storysprout.db.schemas.story import PersistedBeat, StoryContext

__all__ = ["PersistedBeat", "StoryContext"]
