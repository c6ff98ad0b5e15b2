"""Repositories for story storage."""
from storysprout.db.repositories.catalog_repo import StyleRepo, ThemeRepo
from storysprout.db.repositories.story_repo import BeatRepo, StoryRepo

__all__ = ["StyleRepo", "ThemeRepo", "StoryRepo", "BeatRepo"]
