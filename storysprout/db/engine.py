"""Engine creation with SQLite PRAGMAs."""
from sqlalchemy import event
from sqlalchemy.engine import Engine, create_engine

from storysprout.db.base import Base
from storysprout.db.config import DBConfig


def _apply_sqlite_pragmas(dbapi_conn, connection_record, cfg: DBConfig):
    # journal_mode cannot change inside a transaction; the connection is in autocommit here.
    cursor = dbapi_conn.cursor()
    try:
        cursor.execute(f"PRAGMA journal_mode={cfg.sqlite_journal_mode};")
        cursor.execute(f"PRAGMA foreign_keys={'ON' if cfg.sqlite_foreign_keys else 'OFF'};")
        cursor.execute(f"PRAGMA busy_timeout={cfg.sqlite_busy_timeout_ms};")
    finally:
        cursor.close()


def create_engine_from_config(cfg: DBConfig) -> Engine:
    """Create SQLAlchemy engine; SQLite connections get PRAGMAs and may cross threads."""
    is_sqlite = cfg.db_url.startswith("sqlite")
    # Store calls run in worker threads (asyncio.to_thread), so SQLite must allow that.
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    engine = create_engine(
        cfg.db_url,
        echo=cfg.echo_sql,
        connect_args=connect_args,
        pool_pre_ping=cfg.pool_pre_ping and not is_sqlite,
    )
    if is_sqlite:
        event.listens_for(engine, "connect")(
            lambda c, cr: _apply_sqlite_pragmas(c, cr, cfg)
        )
    return engine


def create_all(engine: Engine) -> None:
    """Create every story table (tests and local development; no migrations)."""
    import storysprout.db.models  # noqa: F401  register tables on Base.metadata

    Base.metadata.create_all(engine)
