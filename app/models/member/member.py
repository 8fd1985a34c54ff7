"""Individual member model (directory record with cached council fields)."""

from dataclasses import dataclass
from datetime import datetime

from app.models.common import BaseEntity
from app.models.council.position import PositionType


@dataclass
class MemberRecord(BaseEntity):
    """Association member.

    council_position, is_council_member and current_position_id are a projection
    of the member's active assignments, kept for fast filtering.
    """

    id: str
    first_name: str
    last_name: str
    email: str | None = None
    member_type: str | None = None
    is_active: bool = True
    current_position_id: str | None = None
    council_position: str = PositionType.NON_COUNCIL.value
    is_council_member: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        self.council_position = self.council_position or PositionType.NON_COUNCIL.value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_council_position(self) -> bool:
        """Cached flag says council member and the cached seat is a real one."""
        return self.is_council_member and self.council_position != PositionType.NON_COUNCIL.value

    def is_leader(self) -> bool:
        return self.council_position in (PositionType.PRESIDENT.value, PositionType.VICE_PRESIDENT.value)


MEMBER_DDL = """
CREATE TABLE IF NOT EXISTS member (
    id VARCHAR PRIMARY KEY,
    first_name VARCHAR NOT NULL,
    last_name VARCHAR NOT NULL,
    email VARCHAR,
    member_type VARCHAR,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    current_position_id VARCHAR,
    council_position VARCHAR NOT NULL DEFAULT 'Non-Council Member',
    is_council_member BOOLEAN NOT NULL DEFAULT FALSE,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""
