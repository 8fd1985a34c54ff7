"""Council domain models - terms, seat assignments, compositions."""

from app.models.council.composition import (
    SINGULAR_SLOTS,
    CompositionSnapshot,
    DetailedCompositionSnapshot,
    SeatHolder,
)
from app.models.council.patches import PositionPatch, TermPatch
from app.models.council.position import (
    POSITION_DDL,
    POSITION_INDEXES,
    SEAT_DDL,
    SEAT_HOLDER_DDL,
    CouncilPosition,
    PositionType,
)
from app.models.council.term import COUNCIL_DDL, Term

__all__ = [
    "COUNCIL_DDL",
    "POSITION_DDL",
    "POSITION_INDEXES",
    "SEAT_DDL",
    "SEAT_HOLDER_DDL",
    "SINGULAR_SLOTS",
    "CompositionSnapshot",
    "CouncilPosition",
    "DetailedCompositionSnapshot",
    "PositionType",
    "PositionPatch",
    "SeatHolder",
    "Term",
    "TermPatch",
]
