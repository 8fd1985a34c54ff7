"""DuckDB connection management."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import duckdb
from loguru import logger

import settings
from app.errors import StoreUnavailableError
from app.models import ALL_DDL

_local = threading.local()
_db_path = settings.DB_PATH
_init_lock = threading.Lock()
_initialized: set[str] = set()


def configure(db_path: str | Path) -> None:
    """Point the process at another database file and drop this thread's connection."""
    global _db_path
    close_db()
    _db_path = str(db_path)
    logger.debug("DB path set: {}", _db_path)


def db_exists() -> bool:
    """Check if database file exists."""
    return Path(_db_path).exists()


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.info("DB tables initialized")


def _ensure_schema(conn: duckdb.DuckDBPyConnection) -> None:
    with _init_lock:
        if _db_path in _initialized:
            return
        init_tables(conn)
        _initialized.add(_db_path)


def get_db() -> duckdb.DuckDBPyConnection:
    """Get thread-local connection.

    Connections opened in one process share a single database instance, so
    each thread gets its own connection and its own transaction scope.
    """
    conn = getattr(_local, "conn", None)
    if conn is None or getattr(_local, "path", None) != _db_path:
        close_db()
        try:
            conn = duckdb.connect(_db_path)
        except duckdb.Error as e:
            raise StoreUnavailableError(f"Cannot open database {_db_path}: {e}") from e
        _ensure_schema(conn)
        _local.conn = conn
        _local.path = _db_path
        logger.debug("DB connected: {}", _db_path)
    return conn


def close_db() -> None:
    """Close thread-local connection."""
    conn = getattr(_local, "conn", None)
    if conn is not None:
        conn.close()
        _local.conn = None
        _local.path = None
        logger.debug("DB connection closed")


def in_transaction() -> bool:
    return getattr(_local, "depth", 0) > 0


@contextmanager
def transaction() -> Iterator[duckdb.DuckDBPyConnection]:
    """Run a block in one transaction on this thread's connection.

    Nested blocks join the outer transaction. Any exception rolls back.
    """
    conn = get_db()
    if in_transaction():
        _local.depth += 1
        try:
            yield conn
        finally:
            _local.depth -= 1
        return

    try:
        conn.execute("BEGIN TRANSACTION")
    except duckdb.Error as e:
        raise StoreUnavailableError(f"Cannot begin transaction: {e}") from e
    _local.depth = 1
    try:
        yield conn
    except BaseException:
        _local.depth = 0
        _rollback(conn)
        raise
    _local.depth = 0
    try:
        conn.execute("COMMIT")
    except duckdb.Error as e:
        _rollback(conn)
        raise StoreUnavailableError(f"Commit failed: {e}") from e


def _rollback(conn: duckdb.DuckDBPyConnection) -> None:
    try:
        conn.execute("ROLLBACK")
        logger.debug("Transaction rolled back")
    except duckdb.Error as e:
        # Transaction was already aborted by the failed statement or commit.
        logger.debug("Rollback skipped: {}", e)
