"""Fixture provisioning: open a store, apply the schema, insert seed rows.

Schema and seed run in one transaction. Any failure rolls it back, closes
the connection and removes the file, so callers either get a fully seeded
fixture or a FixtureError.
"""
from __future__ import annotations

import asyncio
import logging
import sqlite3
import time
import uuid
from pathlib import Path

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from orgfixture.config import FixtureConfig
from orgfixture.db.connection import (
    MEMORY,
    SCHEMA_PATH,
    get_row_connection,
    remove_store,
    schema_statements,
)
from orgfixture.db.employee_repo import EmployeeRepo
from orgfixture.db.seed import DEFAULT_SEED, SeedData, insert_seed
from orgfixture.db.team_repo import TeamRepo
from orgfixture.errors import (
    SchemaApplyFailed,
    SeedInsertFailed,
    SetupTimeout,
    StoreUnavailable,
)

log = logging.getLogger(__name__)

# SQLite VM instructions between deadline checks
PROGRESS_STEPS = 1000


class Fixture:
    """Open handle on a seeded store.

    The connection uses sqlite3.Row and is read-only once seeding commits.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        path: Path | None = None,
        keep_file: bool = False,
    ):
        self.conn = conn
        self.path = path
        self.keep_file = keep_file
        self.teams = TeamRepo(conn)
        self.employees = EmployeeRepo(conn)
        self._closed = False

    @property
    def location(self) -> str:
        return str(self.path) if self.path is not None else MEMORY

    @property
    def closed(self) -> bool:
        return self._closed

    def execute(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        """Run an ad hoc query and return all rows."""
        return self.conn.execute(sql, params).fetchall()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.conn.close()
        if self.path is not None and not self.keep_file:
            remove_store(self.path)
        log.debug("Closed fixture %s", self.location)

    def __enter__(self) -> Fixture:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"Fixture({self.location!r})"


class _Deadline:
    def __init__(self, timeout: float | None):
        self.timeout = timeout
        self.expires_at = None if timeout is None else time.monotonic() + timeout

    def expired(self) -> bool:
        return self.expires_at is not None and time.monotonic() >= self.expires_at

    def check(self, stage: str) -> None:
        if self.expired():
            raise SetupTimeout(stage, self.timeout)

    def progress(self) -> int:
        # non-zero aborts the running statement
        return 1 if self.expired() else 0


def new_fixture_path(fixture_dir: Path) -> Path:
    """Return a fresh, collision-free database path under fixture_dir."""
    return fixture_dir / f"fixture-{uuid.uuid4().hex}.db"


def _rollback(conn: sqlite3.Connection, stage: str) -> None:
    conn.set_progress_handler(None, 0)
    if conn.in_transaction:
        conn.execute("ROLLBACK")
    log.warning("Fixture setup rolled back during %s", stage)


def _discard(path: Path | None) -> None:
    """Best-effort removal of a failed store; the setup error takes precedence."""
    if path is None:
        return
    try:
        remove_store(path)
    except OSError as e:
        log.warning("Could not remove %s: %s", path, e)


def _populate(
    conn: sqlite3.Connection,
    deadline: _Deadline,
    statements: list[str],
    seed: SeedData,
) -> None:
    """Apply schema and seed in a single transaction."""
    if deadline.timeout is not None:
        conn.set_progress_handler(deadline.progress, PROGRESS_STEPS)

    stage = "schema"
    try:
        conn.execute("BEGIN")
        for statement in statements:
            conn.execute(statement)
        deadline.check(stage)
        log.debug("Schema applied (%d statements)", len(statements))

        stage = "seed"
        insert_seed(conn, seed)
        deadline.check(stage)
        log.debug("Seeded %d teams, %d employees", len(seed.teams), len(seed.employees))

        stage = "commit"
        conn.execute("COMMIT")

        stage = "finalize"
        conn.execute("PRAGMA query_only = ON")
    except sqlite3.Error as e:
        _rollback(conn, stage)
        if deadline.expired():
            raise SetupTimeout(stage, deadline.timeout) from e
        if stage == "schema":
            raise SchemaApplyFailed(f"schema rejected: {e}") from e
        if stage == "finalize":
            raise StoreUnavailable(f"cannot make store read-only: {e}") from e
        raise SeedInsertFailed(f"seed insert failed: {e}") from e
    except BaseException:
        _rollback(conn, stage)
        raise
    finally:
        conn.set_progress_handler(None, 0)


def provision(
    config: FixtureConfig | None = None,
    *,
    seed: SeedData = DEFAULT_SEED,
    schema_path: Path = SCHEMA_PATH,
    thread_safe: bool = False,
) -> Fixture:
    """Create a fresh, fully seeded fixture.

    Args:
        config: Storage location and timeouts. Defaults to an in-memory store.
        seed: Rows to insert after the schema.
        schema_path: SQL file with the schema statements.
        thread_safe: If True, the connection may be used from other threads.

    Raises:
        StoreUnavailable: the store could not be created or opened.
        SchemaApplyFailed: a schema statement was rejected.
        SeedInsertFailed: a seed row violated a constraint.
        SetupTimeout: setup ran past config.setup_timeout.
    """
    config = config or FixtureConfig()
    deadline = _Deadline(config.setup_timeout)

    try:
        statements = schema_statements(schema_path)
    except OSError as e:
        raise SchemaApplyFailed(f"cannot read schema {schema_path}: {e}") from e

    path = new_fixture_path(config.fixture_dir) if config.fixture_dir is not None else None
    log.info("Provisioning fixture at %s", path if path is not None else MEMORY)

    deadline.check("connect")
    try:
        conn = get_row_connection(
            path,
            thread_safe=thread_safe,
            busy_timeout=config.busy_timeout,
        )
    except StoreUnavailable:
        _discard(path)
        raise

    try:
        _populate(conn, deadline, statements, seed)
    except BaseException:
        conn.close()
        _discard(path)
        raise

    return Fixture(conn, path, keep_file=config.keep_files)


def provision_with_retry(config: FixtureConfig | None = None, **kwargs) -> Fixture:
    """provision() with exponential backoff on StoreUnavailable and SetupTimeout.

    Schema and seed failures are deterministic and raised immediately.
    """
    config = config or FixtureConfig()
    retrying = Retrying(
        retry=retry_if_exception_type((StoreUnavailable, SetupTimeout)),
        stop=stop_after_attempt(config.max_attempts),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
        before_sleep=before_sleep_log(log, logging.WARNING),
        reraise=True,
    )
    return retrying(provision, config, **kwargs)


async def aprovision(config: FixtureConfig | None = None, **kwargs) -> Fixture:
    """Run provision() in a worker thread; the returned connection is thread-safe."""
    kwargs["thread_safe"] = True
    return await asyncio.to_thread(provision, config, **kwargs)
