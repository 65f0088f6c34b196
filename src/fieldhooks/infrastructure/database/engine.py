"""Database engine setup for SQLite with WAL mode.

The DB is stored at ``{site_root}/.fieldhooks/fieldhooks.db``. SQLAlchemy
Core (not ORM) is used: the host only reads and writes rows, it never
needs identity maps or unit-of-work tracking.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from fieldhooks.infrastructure.database.schema import metadata

DATA_DIRNAME = ".fieldhooks"
DB_FILENAME = "fieldhooks.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(site_root: Path) -> Engine:
    """Initialize the database at ``{site_root}/.fieldhooks/fieldhooks.db``.

    Creates the ``.fieldhooks/`` directory structure (including the
    ``plugins/`` and ``templates/`` override directories) and all tables.

    Idempotent: safe to call on an existing site.
    """
    data_dir = site_root / DATA_DIRNAME
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "plugins").mkdir(exist_ok=True)
    (data_dir / "templates").mkdir(exist_ok=True)

    engine = create_db_engine(data_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine
