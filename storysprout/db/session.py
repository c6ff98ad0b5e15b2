"""Session factory and context manager."""
from contextlib import contextmanager
from typing import Generator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from storysprout.db.config import DBConfig
from storysprout.db.engine import create_engine_from_config

# Module-level engine/session factory, set by init_db()
_engine: Engine | None = None
SessionLocal: sessionmaker | None = None


def init_db(cfg: DBConfig | None = None) -> Engine:
    """Initialize engine and session factory. Call once at app startup (or per test)."""
    global _engine, SessionLocal
    if _engine is not None:
        _engine.dispose()
    cfg = cfg or DBConfig()
    _engine = create_engine_from_config(cfg)
    SessionLocal = sessionmaker(
        bind=_engine,
        autoflush=True,
        expire_on_commit=False,
        autobegin=True,
    )
    return _engine


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Session context: commit on success, rollback + re-raise on exception."""
    if SessionLocal is None:
        init_db()
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
