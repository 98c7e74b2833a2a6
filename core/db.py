"""
core/db.py -- Shared SQLAlchemy engine factory and schema metadata.

One Engine (and its connection pool) is created by the API lifespan and
passed into every store. Stores never open their own engines, so the whole
process shares one pool and the lifespan owns teardown:

    engine = create_db_engine(settings.database_url)
    users = UserStore(engine)
    blogs = BlogStore(engine)
    ...
    engine.dispose()

metadata is shared so the blogs.user_id foreign key can resolve users.id.

Layer rule: no imports from api/, auth/, or blog/.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.engine import Engine

metadata = MetaData()


def _sqlite_pragmas(dbapi_conn, connection_record) -> None:
    """Enable WAL journaling and foreign key enforcement on each new connection.

    SQLite PRAGMAs are per-connection and are not inherited from the pool,
    and foreign_keys is OFF by default.
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(db_url: str) -> Engine:
    """Build the process-wide Engine for db_url."""
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _sqlite_pragmas)
    return engine


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
