"""Pytest config and fixtures: temp SQLite story database, seeded story, beat JSON builders."""
import itertools
import json
import os
import tempfile

import pytest

from storysprout.db.config import DBConfig
from storysprout.db.engine import create_all
from storysprout.db.repositories.catalog_repo import StyleRepo, ThemeRepo
from storysprout.db.repositories.story_repo import StoryRepo
from storysprout.db.session import init_db, session_scope

_SAFE_WORDS = ("happy", "bunny", "hops", "over", "soft", "green", "grass", "and", "giggles", "with", "friends")


@pytest.fixture
def temp_db_url() -> str:
    """SQLite URL for a temporary file (WAL-friendly)."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield f"sqlite:///{path}"
    for suffix in ("", "-wal", "-shm"):
        try:
            os.unlink(path + suffix)
        except OSError:
            pass


@pytest.fixture
def db_config(temp_db_url: str) -> DBConfig:
    """DBConfig pointing to temp SQLite file."""
    return DBConfig(db_url=temp_db_url, echo_sql=False)


@pytest.fixture
def db_engine(db_config: DBConfig):
    """Module session factory bound to the temp DB, with all tables created."""
    engine = init_db(db_config)
    create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def story_id(db_engine) -> str:
    """A fresh calm-bedtime story about Forest Friends with no beats yet."""
    with session_scope() as session:
        style = StyleRepo().create(session, name="Calm Bedtime", slug="calm-bedtime", emoji="🌙")
        theme = ThemeRepo().create(session, name="Forest Friends", slug="forest-friends", emoji="🌳")
        story = StoryRepo().create(session, style_id=style.id, theme_id=theme.id)
        return story.id


@pytest.fixture
def make_segment():
    """Build a harmless segment with exactly n words."""

    def _make(n: int = 60) -> str:
        return " ".join(itertools.islice(itertools.cycle(_SAFE_WORDS), n))

    return _make


@pytest.fixture
def beat_json(make_segment):
    """Build a raw model response for beat n (question/options filled in for beats 1-4)."""

    def _make(beat: int, *, words: int = 60, segment: str | None = None, **overrides) -> str:
        final = beat == 5
        payload = {
            "beat": beat,
            "segment": segment if segment is not None else make_segment(words),
            "question": None if final else "What should Pip do next?",
            "options": [] if final else ["Visit the duck pond", "Pick some berries"],
        }
        payload.update(overrides)
        return json.dumps(payload)

    return _make
