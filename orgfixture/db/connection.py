"""SQLite connection management with foreign keys and schema loading."""
from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from orgfixture.errors import SchemaApplyFailed, StoreUnavailable

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

MEMORY = ":memory:"

log = logging.getLogger(__name__)


def get_connection(
    db_path: Path | None,
    thread_safe: bool = False,
    busy_timeout: float = 5.0,
) -> sqlite3.Connection:
    """Open a SQLite connection in explicit-transaction mode.

    Args:
        db_path: Path to the database file, or None for an in-memory store.
        thread_safe: If True, allow cross-thread usage.
        busy_timeout: Seconds to wait on a locked database.

    Returns:
        Connection with foreign key enforcement on (and WAL mode for files).

    Raises:
        StoreUnavailable: the directory or database could not be created.
    """
    target = MEMORY
    if db_path is not None:
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreUnavailable(f"cannot create {db_path.parent}: {e}") from e
        target = str(db_path)

    try:
        conn = sqlite3.connect(
            target,
            timeout=busy_timeout,
            isolation_level=None,
            check_same_thread=not thread_safe,
        )
    except sqlite3.Error as e:
        raise StoreUnavailable(f"cannot open {target}: {e}") from e

    try:
        conn.execute("PRAGMA foreign_keys = ON")
        if db_path is not None:
            conn.execute("PRAGMA journal_mode=WAL")
    except sqlite3.Error as e:
        conn.close()
        raise StoreUnavailable(f"cannot initialize {target}: {e}") from e

    log.debug("Opened %s", target)
    return conn


def get_row_connection(
    db_path: Path | None,
    thread_safe: bool = False,
    busy_timeout: float = 5.0,
) -> sqlite3.Connection:
    """Like get_connection but with Row factory for dict-like access."""
    conn = get_connection(db_path, thread_safe=thread_safe, busy_timeout=busy_timeout)
    conn.row_factory = sqlite3.Row
    return conn


def schema_statements(path: Path = SCHEMA_PATH) -> list[str]:
    """Split a schema file into complete SQL statements.

    Raises:
        SchemaApplyFailed: the file ends with an unterminated statement.
    """
    statements = []
    buf = ""
    with open(path) as f:
        for line in f:
            buf += line
            if sqlite3.complete_statement(buf):
                statements.append(buf.strip())
                buf = ""

    leftover = "\n".join(
        line for line in buf.splitlines() if not line.strip().startswith("--")
    ).strip()
    if leftover:
        raise SchemaApplyFailed(f"unterminated statement at end of {path}: {leftover[:60]!r}")
    return statements


def remove_store(db_path: Path) -> None:
    """Delete a database file together with its WAL sidecars."""
    for suffix in ("", "-wal", "-shm"):
        path = Path(f"{db_path}{suffix}")
        if path.exists():
            path.unlink()
