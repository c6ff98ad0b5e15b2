"""DB module: config, engine, session, models, repositories."""
from storysprout.db.config import DBConfig
from storysprout.db.engine import create_all
from storysprout.db.session import init_db, session_scope

__all__ = ["DBConfig", "create_all", "init_db", "session_scope"]
