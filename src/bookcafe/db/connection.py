# ABOUTME: SQLite database connection management for the bookcafe library catalog.
# ABOUTME: Opens or creates the database, brings its schema up to date, and sets pragmas.

import logging
import sqlite3
from pathlib import Path

from bookcafe.db.schema import MIGRATIONS, SCHEMA_V1

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".bookcafe" / "library.db"


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Highest applied schema version, or 0 for a database with no catalog yet."""
    cursor = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
    )
    if cursor.fetchone() is None:
        return 0
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] or 0


def _apply_migrations(conn: sqlite3.Connection) -> list[int]:
    """Bring the database up to the latest schema version.

    An empty database first gets the base catalog tables (v1). Later
    migrations run in version order and each records its own version, so
    calling this on an up-to-date database does nothing.

    Returns:
        The versions applied by this call, oldest first.
    """
    current = _get_schema_version(conn)
    applied: list[int] = []
    if current == 0:
        conn.executescript(SCHEMA_V1)
        current = 1
        applied.append(current)

    for version, sql in MIGRATIONS:
        if version <= current:
            continue
        logger.debug("Applying schema migration v%d", version)
        conn.executescript(sql)
        applied.append(version)
    return applied


def open_library(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the bookcafe library database.

    Parent directories are created as needed. The connection uses WAL
    journaling, enforces foreign keys (author and category links cascade on
    book delete), and returns sqlite3.Row objects for dict-like access.

    Args:
        path: Path to the database file. Defaults to ~/.bookcafe/library.db.

    Returns:
        A configured sqlite3.Connection whose schema includes the search index.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")

    applied = _apply_migrations(conn)
    if applied:
        logger.info("Library %s now at schema v%d", db_path, applied[-1])

    return conn
