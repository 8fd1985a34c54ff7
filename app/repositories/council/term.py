"""Term repository - council term records."""

from typing import Any

from loguru import logger

from app.models.common import utcnow
from app.models.council import Term
from app.repositories.base import BaseRepository

_COLUMNS = "id, name, start_date, end_date, is_active, description, created_at, updated_at"
_UPDATABLE = {"name", "start_date", "end_date", "is_active", "description"}


class TermRepository(BaseRepository):
    """Repository for council terms."""

    def _to_terms(self, query: str, params: list | None = None) -> list[Term]:
        columns, rows = self.fetch_table(query, params)
        return [Term.from_row(columns, r) for r in rows]

    def find_by_id(self, term_id: str) -> Term | None:
        """Get a term, None if missing."""
        terms = self._to_terms(f"SELECT {_COLUMNS} FROM council WHERE id = ?", [term_id])
        return terms[0] if terms else None

    def find_active(self) -> Term | None:
        """Get the active term, None if no term is active."""
        terms = self._to_terms(
            f"SELECT {_COLUMNS} FROM council WHERE is_active ORDER BY start_date DESC LIMIT 1"
        )
        return terms[0] if terms else None

    def find_all(self) -> list[Term]:
        """All terms, newest start date first."""
        return self._to_terms(f"SELECT {_COLUMNS} FROM council ORDER BY start_date DESC, created_at DESC")

    def count_active(self) -> int:
        row = self.fetchone("SELECT COUNT(*) FROM council WHERE is_active")
        return int(row[0])

    def insert(self, term: Term) -> str:
        """Insert a term record as given. Returns its id."""
        now = utcnow()
        self.execute(
            f"INSERT INTO council ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            [
                term.id,
                term.name,
                term.start_date,
                term.end_date,
                term.is_active,
                term.description,
                term.created_at or now,
                term.updated_at or now,
            ],
        )
        logger.debug("Term inserted: {} ({})", term.id, term.name)
        return term.id

    def update_fields(self, term_id: str, fields: dict[str, Any]) -> bool:
        """Update mutable term fields. Returns False if the term does not exist."""
        unknown = set(fields) - _UPDATABLE
        if unknown:
            raise ValueError(f"Not updatable: {sorted(unknown)}")
        if not fields:
            return self.find_by_id(term_id) is not None

        assignments = ", ".join(f"{name} = ?" for name in fields)
        row = self.fetchone(
            f"UPDATE council SET {assignments}, updated_at = ? WHERE id = ? RETURNING id",
            [*fields.values(), utcnow(), term_id],
        )
        return row is not None

    def bulk_deactivate_except(self, term_id: str | None) -> int:
        """Clear the active flag on every term other than term_id. Returns rows changed."""
        rows = self.fetchall(
            "UPDATE council SET is_active = FALSE, updated_at = ? WHERE is_active AND id IS DISTINCT FROM ? RETURNING id",
            [utcnow(), term_id],
        )
        if rows:
            logger.debug("Deactivated {} term(s)", len(rows))
        return len(rows)
