"""SQLite database connection and schema management.

Provides connection management and schema initialization for the
users, test_results and saved_careers tables.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("db/newgen.db")
DEFAULT_TIMEOUT = 5.0

# Current database settings (module-level, set by init_db)
_db_path: Path | None = None
_timeout: float = DEFAULT_TIMEOUT


class StoreError(Exception):
    """Raised when a query against the store fails."""

    pass


class DuplicateEntryError(StoreError):
    """Raised when an insert violates a uniqueness constraint."""

    pass


def init_db(db_path: Path | str | None = None, timeout: float | None = None) -> None:
    """Initialize database with schema.

    Creates the database file and all required tables if they don't exist.

    Args:
        db_path: Path to database file. Defaults to db/newgen.db
        timeout: Seconds to wait on a locked database
    """
    global _db_path, _timeout
    _db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
    if timeout is not None:
        _timeout = timeout

    with get_db() as conn:
        _create_schema(conn)

    logger.info("database.initialized", path=str(_db_path))


def get_db_path() -> Path:
    """Return the database file currently in use."""
    return _db_path or DEFAULT_DB_PATH


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Every call opens its own connection, so concurrent requests never share
    one. sqlite3 errors are re-raised as StoreError.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db() as conn:
            cursor = conn.execute("SELECT * FROM users")
            rows = cursor.fetchall()
    """
    db_path = get_db_path()

    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(db_path, timeout=_timeout)
    except sqlite3.Error as e:
        raise StoreError(f"Could not open database {db_path}: {e}") from e

    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")

    try:
        yield conn
        conn.commit()
    except sqlite3.IntegrityError as e:
        conn.rollback()
        raise DuplicateEntryError(str(e)) from e
    except sqlite3.Error as e:
        conn.rollback()
        raise StoreError(str(e)) from e
    except (OverflowError, UnicodeError) as e:
        # Raised while binding: ints wider than 64 bits, lone surrogates
        conn.rollback()
        raise StoreError(f"Cannot bind parameter: {e}") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def ping() -> bool:
    """Check that the store answers a trivial query."""
    try:
        with get_db() as conn:
            conn.execute("SELECT 1").fetchone()
    except StoreError as e:
        logger.warning("database.ping_failed", error=str(e))
        return False
    return True


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency.
    """
    conn.executescript(
        """
        -- users: email is UNIQUE, name is not
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL
        );

        -- test_results: written by the assessment flow, read by /profile
        CREATE TABLE IF NOT EXISTS test_results (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL REFERENCES users(id),
            category TEXT NOT NULL,
            score INTEGER NOT NULL
        );

        -- saved_careers: one row per (user_id, career_name)
        CREATE TABLE IF NOT EXISTS saved_careers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            career_name TEXT NOT NULL,
            UNIQUE (user_id, career_name)
        );

        CREATE INDEX IF NOT EXISTS idx_users_name ON users(name);
        CREATE INDEX IF NOT EXISTS idx_test_results_user ON test_results(user_id);
        CREATE INDEX IF NOT EXISTS idx_saved_careers_user ON saved_careers(user_id);
        """
    )
