# ABOUTME: SQLite connection management for the Bookland library catalog.
# ABOUTME: Opens or creates the database, applies the schema once, and offers a closing context manager.

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from bookland.db.schema import SCHEMA_V1

DEFAULT_DATA_PATH = Path.home() / ".bookland"
DB_FILENAME = "library.db"
DEFAULT_DB_PATH = DEFAULT_DATA_PATH / DB_FILENAME

# Milliseconds a writer waits on a locked database before giving up
BUSY_TIMEOUT_MS = 5000


def _ensure_schema(conn: sqlite3.Connection) -> None:
    """Create tables and indexes unless schema_version already exists."""
    cursor = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    if cursor.fetchone() is None:
        conn.executescript(SCHEMA_V1)


def open_library(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the Bookland library database.

    Parent directories are created as needed. The connection uses WAL
    journaling, a busy timeout so a concurrent writer is waited on rather
    than failing at once, and sqlite3.Row for name-based column access.

    Args:
        path: Path to the database file. Defaults to ~/.bookland/library.db.

    Returns:
        A configured sqlite3.Connection.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
    _ensure_schema(conn)
    return conn


@contextmanager
def library_connection(path: Path | None = None) -> Iterator[sqlite3.Connection]:
    """Open the library database for the duration of a with-block."""
    conn = open_library(path)
    try:
        yield conn
    finally:
        conn.close()
