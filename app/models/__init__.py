"""Models package - DDL and entities for all domains."""

from app.models.common import BaseEntity
from app.models.council import (
    COUNCIL_DDL,
    POSITION_DDL,
    POSITION_INDEXES,
    SEAT_DDL,
    SEAT_HOLDER_DDL,
    CompositionSnapshot,
    CouncilPosition,
    DetailedCompositionSnapshot,
    PositionType,
    SeatHolder,
    Term,
)
from app.models.member import MEMBER_DDL, MemberRecord

ALL_DDL = [
    # Member directory
    MEMBER_DDL,
    # Council
    COUNCIL_DDL,
    POSITION_DDL,
    SEAT_DDL,
    SEAT_HOLDER_DDL,
    *POSITION_INDEXES,
]

__all__ = [
    # Common
    "BaseEntity",
    # Member
    "MEMBER_DDL",
    "MemberRecord",
    # Council
    "COUNCIL_DDL",
    "POSITION_DDL",
    "SEAT_DDL",
    "SEAT_HOLDER_DDL",
    "CompositionSnapshot",
    "CouncilPosition",
    "DetailedCompositionSnapshot",
    "PositionType",
    "SeatHolder",
    "Term",
    # All DDL
    "ALL_DDL",
]
