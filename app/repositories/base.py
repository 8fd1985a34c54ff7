"""Base repository class."""

from contextlib import AbstractContextManager
from typing import Any

import duckdb
from loguru import logger

from app.errors import StoreUnavailableError
from app.repositories.db import get_db, transaction


class BaseRepository:
    """Base repository with common functionality.

    Holds no state between calls: every read goes to the database, and the
    connection is looked up per call so one repository can serve many threads.
    """

    def __init__(self):
        logger.debug("{} initialized", self.__class__.__name__)

    @property
    def _db(self) -> duckdb.DuckDBPyConnection:
        return get_db()

    def transaction(self) -> AbstractContextManager:
        """Transaction shared by every repository used on this thread."""
        return transaction()

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL query.

        Constraint violations propagate for the caller to interpret; any
        other engine failure becomes StoreUnavailableError.
        """
        try:
            if params:
                return self._db.execute(query, params)
            return self._db.execute(query)
        except duckdb.ConstraintException:
            raise
        except duckdb.Error as e:
            # Also write-write conflicts from writers outside the council lock; a retry sees the rule error.
            logger.warning("{} query failed: {}", self.__class__.__name__, e)
            raise StoreUnavailableError(str(e)) from e

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()

    def fetch_table(self, query: str, params: list | None = None) -> tuple[list[str], list[tuple]]:
        """Execute and return (column names, rows)."""
        cursor = self.execute(query, params)
        columns = [d[0] for d in cursor.description]
        return columns, cursor.fetchall()
