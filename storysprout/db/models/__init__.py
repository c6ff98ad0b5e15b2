# ORM models: import all so Base.metadata has every table.
from storysprout.db.models.catalog import Style, Theme
from storysprout.db.models.story import Story, StoryBeat

__all__ = ["Style", "Theme", "Story", "StoryBeat"]
