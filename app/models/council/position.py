"""Council position (seat assignment) model."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from app.errors import InvalidPositionTypeError
from app.models.common import BaseEntity, utcnow


class PositionType(StrEnum):
    """Governance seat. Values are the display labels."""

    PRESIDENT = "President"
    VICE_PRESIDENT = "Vice President"
    BOARD_TREASURER = "Board Treasurer"
    BOARD_SECRETARY = "Board Secretary"
    BOARD_MEMBER = "Board Member"
    NON_COUNCIL = "Non-Council Member"

    @classmethod
    def parse(cls, raw: "PositionType | str") -> "PositionType":
        """Accept a label ("Vice President"), a name ("VICE_PRESIDENT") or "VicePresident"."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidPositionTypeError(raw)

        key = "".join(ch for ch in raw.lower() if ch.isalnum())
        for member in cls:
            if key in (_compact(member.value), _compact(member.name)):
                return member
        raise InvalidPositionTypeError(raw)


def _compact(text: str) -> str:
    return "".join(ch for ch in text.lower() if ch.isalnum())


@dataclass
class CouncilPosition(BaseEntity):
    """One member's tenure in one seat during one council term."""

    id: str
    member_id: str
    council_id: str
    position: PositionType
    start_date: datetime
    end_date: datetime | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        self.position = PositionType.parse(self.position)

    def is_term_active(self, now: datetime | None = None) -> bool:
        """Active flag set and now within [start, end). No end date means open-ended."""
        now = now or utcnow()
        if not self.is_active or now < self.start_date:
            return False
        return self.end_date is None or now < self.end_date


POSITION_DDL = """
CREATE TABLE IF NOT EXISTS council_position (
    id VARCHAR PRIMARY KEY,
    member_id VARCHAR NOT NULL,
    council_id VARCHAR NOT NULL,
    position VARCHAR NOT NULL,
    start_date TIMESTAMP NOT NULL,
    end_date TIMESTAMP,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""

# One row per occupied seat: (council, position, seat_no) is the capacity guard.
SEAT_DDL = """
CREATE TABLE IF NOT EXISTS council_seat (
    council_id VARCHAR NOT NULL,
    position VARCHAR NOT NULL,
    seat_no INTEGER NOT NULL,
    position_id VARCHAR NOT NULL,
    PRIMARY KEY (council_id, position, seat_no)
)
"""

# One row per member holding an active seat in a council.
SEAT_HOLDER_DDL = """
CREATE TABLE IF NOT EXISTS council_seat_holder (
    council_id VARCHAR NOT NULL,
    member_id VARCHAR NOT NULL,
    position_id VARCHAR NOT NULL,
    PRIMARY KEY (council_id, member_id)
)
"""

POSITION_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_position_council ON council_position(council_id)",
    "CREATE INDEX IF NOT EXISTS idx_position_member ON council_position(member_id)",
]
