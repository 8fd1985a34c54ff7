"""Position repository - seat assignments and seat claims."""

from typing import Any

import duckdb
from loguru import logger

from app.errors import CapacityExceededError, DuplicateActiveAssignmentError
from app.models.common import utcnow
from app.models.council import CouncilPosition, PositionType
from app.repositories.base import BaseRepository

_COLUMNS = "id, member_id, council_id, position, start_date, end_date, is_active, created_at, updated_at"
_UPDATABLE = {"position", "start_date", "end_date", "is_active"}


class PositionRepository(BaseRepository):
    """Repository for council position assignments.

    Active assignments also own rows in council_seat (one per occupied seat
    number) and council_seat_holder (one per member per council). Their primary
    keys reject a second writer that raced past the engine's pre-checks.
    """

    def _to_positions(self, query: str, params: list | None = None) -> list[CouncilPosition]:
        columns, rows = self.fetch_table(query, params)
        return [CouncilPosition.from_row(columns, r) for r in rows]

    # ========== Reads ==========

    def find_by_id(self, position_id: str) -> CouncilPosition | None:
        """Get an assignment, None if missing."""
        found = self._to_positions(f"SELECT {_COLUMNS} FROM council_position WHERE id = ?", [position_id])
        return found[0] if found else None

    def count_active(self, council_id: str, position: PositionType) -> int:
        """Active assignments of one type in a council."""
        row = self.fetchone(
            "SELECT COUNT(*) FROM council_position WHERE council_id = ? AND position = ? AND is_active",
            [council_id, PositionType.parse(position).value],
        )
        return int(row[0])

    def count_active_by_type(self, council_id: str) -> dict[PositionType, int]:
        rows = self.fetchall(
            """
            SELECT position, COUNT(*) FROM council_position
            WHERE council_id = ? AND is_active
            GROUP BY position
            """,
            [council_id],
        )
        return {PositionType.parse(r[0]): int(r[1]) for r in rows}

    def find_all_by_council(self, council_id: str, active_only: bool = True) -> list[CouncilPosition]:
        """Assignments of a council, oldest start first."""
        query = f"SELECT {_COLUMNS} FROM council_position WHERE council_id = ?"
        if active_only:
            query += " AND is_active"
        query += " ORDER BY start_date, created_at, id"
        result = self._to_positions(query, [council_id])
        logger.debug("find_all_by_council({}, active_only={}): {}", council_id, active_only, len(result))
        return result

    def find_all_by_member(self, member_id: str) -> list[CouncilPosition]:
        """Every assignment a member ever held, newest start first."""
        return self._to_positions(
            f"SELECT {_COLUMNS} FROM council_position WHERE member_id = ? ORDER BY start_date DESC, created_at DESC",
            [member_id],
        )

    def find_active_by_member(self, member_id: str, council_id: str | None = None) -> list[CouncilPosition]:
        query = f"SELECT {_COLUMNS} FROM council_position WHERE member_id = ? AND is_active"
        params: list[Any] = [member_id]
        if council_id is not None:
            query += " AND council_id = ?"
            params.append(council_id)
        query += " ORDER BY start_date DESC, created_at DESC"
        return self._to_positions(query, params)

    # ========== Writes ==========

    def insert(self, position: CouncilPosition) -> str:
        """Insert an assignment record. Returns its id."""
        now = utcnow()
        self.execute(
            f"INSERT INTO council_position ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                position.id,
                position.member_id,
                position.council_id,
                position.position.value,
                position.start_date,
                position.end_date,
                position.is_active,
                position.created_at or now,
                position.updated_at or now,
            ],
        )
        logger.debug("Position inserted: {} ({} in {})", position.id, position.position, position.council_id)
        return position.id

    def update_fields(self, position_id: str, fields: dict[str, Any]) -> bool:
        """Update mutable assignment fields. Returns False if the assignment does not exist."""
        unknown = set(fields) - _UPDATABLE
        if unknown:
            raise ValueError(f"Not updatable: {sorted(unknown)}")
        if not fields:
            return self.find_by_id(position_id) is not None

        values = [v.value if isinstance(v, PositionType) else v for v in fields.values()]
        assignments = ", ".join(f"{name} = ?" for name in fields)
        row = self.fetchone(
            f"UPDATE council_position SET {assignments}, updated_at = ? WHERE id = ? RETURNING id",
            [*values, utcnow(), position_id],
        )
        return row is not None

    # ========== Seat claims ==========

    def _take_seat(self, position_id: str, council_id: str, kind: PositionType, capacity: int) -> int:
        taken = {
            r[0]
            for r in self.fetchall(
                "SELECT seat_no FROM council_seat WHERE council_id = ? AND position = ?",
                [council_id, kind.value],
            )
        }
        free = [n for n in range(1, capacity + 1) if n not in taken]
        if not free:
            raise CapacityExceededError(kind, council_id)

        try:
            self.execute(
                "INSERT INTO council_seat (council_id, position, seat_no, position_id) VALUES (?, ?, ?, ?)",
                [council_id, kind.value, free[0], position_id],
            )
        except duckdb.ConstraintException as e:
            raise CapacityExceededError(kind, council_id) from e
        logger.debug("Seat {} #{} claimed by {}", kind, free[0], position_id)
        return free[0]

    def claim_seat(self, position: CouncilPosition, capacity: int) -> int:
        """Take the lowest free seat number and the member's holder slot.

        Raises CapacityExceededError when every seat is taken and
        DuplicateActiveAssignmentError when the member already holds a seat
        in the council. Returns the seat number.
        """
        seat_no = self._take_seat(position.id, position.council_id, position.position, capacity)
        try:
            self.execute(
                "INSERT INTO council_seat_holder (council_id, member_id, position_id) VALUES (?, ?, ?)",
                [position.council_id, position.member_id, position.id],
            )
        except duckdb.ConstraintException as e:
            raise DuplicateActiveAssignmentError(position.member_id, position.council_id) from e
        return seat_no

    def move_seat(self, position: CouncilPosition, new_type: PositionType, capacity: int) -> int:
        """Swap an active assignment's seat claim to another position type."""
        self.execute("DELETE FROM council_seat WHERE position_id = ?", [position.id])
        return self._take_seat(position.id, position.council_id, new_type, capacity)

    def release_seat(self, position_id: str) -> None:
        """Drop every claim held by an assignment."""
        self.execute("DELETE FROM council_seat WHERE position_id = ?", [position_id])
        self.execute("DELETE FROM council_seat_holder WHERE position_id = ?", [position_id])

