"""SQLite database holding the notes and categories stores."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from notelytic.core.config import DATABASE_PATH

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"

# Seconds a writer waits on a locked database before failing
BUSY_TIMEOUT = 10.0


def _resolve(db_path: Path | str | None) -> Path:
    return Path(db_path) if db_path else DATABASE_PATH


def applied_migrations(conn: sqlite3.Connection) -> list[str]:
    """Names of the schema migrations recorded in the database, in order."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS _migrations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT UNIQUE NOT NULL,
            applied_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )
    rows = conn.execute("SELECT name FROM _migrations ORDER BY id").fetchall()
    return [row[0] for row in rows]


def _apply_pending(conn: sqlite3.Connection) -> list[str]:
    done = set(applied_migrations(conn))
    pending = [p for p in sorted(MIGRATIONS_DIR.glob("*.sql")) if p.name not in done]

    for script in pending:
        logger.info("Creating stores from %s", script.name)
        conn.executescript(script.read_text(encoding="utf-8"))
        conn.execute("INSERT INTO _migrations (name) VALUES (?)", (script.name,))
        conn.commit()

    return [script.name for script in pending]


def init_db(db_path: Path | str | None = None) -> list[str]:
    """
    Open the notes database, creating it and its stores when missing.

    Args:
        db_path: Path to SQLite database (defaults to DATABASE_PATH)

    Returns:
        Names of the migrations applied by this call
    """
    path = _resolve(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(path, timeout=BUSY_TIMEOUT)
    try:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA synchronous=NORMAL")
        applied = _apply_pending(conn)
    finally:
        conn.close()

    if applied:
        logger.debug("Database %s at schema %s", path, applied[-1])
    return applied


@contextmanager
def get_connection(
    db_path: Path | str | None = None,
) -> Generator[sqlite3.Connection, None, None]:
    """
    Open a connection scoped to one transaction.

    Writes are committed when the block exits normally and discarded when
    it raises.

    Yields:
        SQLite connection returning ``sqlite3.Row`` rows
    """
    conn = sqlite3.connect(_resolve(db_path), timeout=BUSY_TIMEOUT)
    conn.row_factory = sqlite3.Row

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
