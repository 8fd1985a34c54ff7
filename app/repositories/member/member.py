"""Member repository - directory lookups and cached council fields."""

import polars as pl
from loguru import logger

from app.models.common import utcnow
from app.models.council import PositionType
from app.models.member import MemberRecord
from app.repositories.base import BaseRepository

_COLUMNS = (
    "id, first_name, last_name, email, member_type, is_active, "
    "current_position_id, council_position, is_council_member, created_at, updated_at"
)


class MemberRepository(BaseRepository):
    """Repository for the member directory."""

    def find_by_id(self, member_id: str) -> MemberRecord | None:
        """Get a member, None if missing."""
        columns, rows = self.fetch_table(f"SELECT {_COLUMNS} FROM member WHERE id = ?", [member_id])
        return MemberRecord.from_row(columns, rows[0]) if rows else None

    def find_council_members(self) -> list[MemberRecord]:
        """Members whose cached flag marks them as council members."""
        columns, rows = self.fetch_table(
            f"SELECT {_COLUMNS} FROM member WHERE is_council_member ORDER BY last_name, first_name"
        )
        return [MemberRecord.from_row(columns, r) for r in rows]

    def all_ids(self) -> list[str]:
        return [r[0] for r in self.fetchall("SELECT id FROM member ORDER BY id")]

    def insert(self, member: MemberRecord) -> str:
        now = utcnow()
        self.execute(
            f"INSERT INTO member ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                member.id,
                member.first_name,
                member.last_name,
                member.email,
                member.member_type,
                member.is_active,
                member.current_position_id,
                member.council_position,
                member.is_council_member,
                member.created_at or now,
                member.updated_at or now,
            ],
        )
        logger.debug("Member inserted: {}", member.id)
        return member.id

    def insert_many(self, members: list[MemberRecord]) -> int:
        """Bulk insert members through a polars frame."""
        if not members:
            return 0
        now = utcnow()
        members_df = pl.DataFrame(
            [
                {
                    "id": m.id,
                    "first_name": m.first_name,
                    "last_name": m.last_name,
                    "email": m.email,
                    "member_type": m.member_type,
                    "is_active": m.is_active,
                    "current_position_id": m.current_position_id,
                    "council_position": m.council_position,
                    "is_council_member": m.is_council_member,
                    "created_at": m.created_at or now,
                    "updated_at": m.updated_at or now,
                }
                for m in members
            ],
            schema_overrides={"email": pl.Utf8, "member_type": pl.Utf8, "current_position_id": pl.Utf8},
        )
        conn = self._db
        conn.register("members_df", members_df)
        try:
            self.execute(f"INSERT INTO member ({_COLUMNS}) SELECT {_COLUMNS} FROM members_df")
        finally:
            conn.unregister("members_df")
        logger.info("Members: +{}", len(members))
        return len(members)

    def delete(self, member_id: str) -> bool:
        row = self.fetchone("DELETE FROM member WHERE id = ? RETURNING id", [member_id])
        return row is not None

    def update_council_cache(
        self,
        member_id: str,
        position_id: str | None,
        position: PositionType,
        is_council_member: bool,
    ) -> bool:
        """Write the cached council fields. Returns False if the member does not exist."""
        row = self.fetchone(
            """
            UPDATE member
            SET current_position_id = ?, council_position = ?, is_council_member = ?, updated_at = ?
            WHERE id = ?
            RETURNING id
            """,
            [position_id, PositionType.parse(position).value, is_council_member, utcnow(), member_id],
        )
        return row is not None
