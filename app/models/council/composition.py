"""Council composition snapshots - derived read models, never persisted."""

from dataclasses import dataclass, field

from app.models.common import BaseEntity
from app.models.council.position import CouncilPosition, PositionType
from app.models.member import MemberRecord


@dataclass
class CompositionSnapshot(BaseEntity):
    """Occupants of every seat in a term, built from active assignments."""

    council_id: str
    president: CouncilPosition | None = None
    vice_president: CouncilPosition | None = None
    board_treasurer: CouncilPosition | None = None
    board_secretary: CouncilPosition | None = None
    board_members: list[CouncilPosition] = field(default_factory=list)
    total_positions: int = 0

    def occupants(self, position_type: PositionType) -> list[CouncilPosition]:
        return _occupants(self, position_type)


@dataclass
class SeatHolder(BaseEntity):
    """Assignment joined with its member record."""

    position: CouncilPosition
    member: MemberRecord


@dataclass
class DetailedCompositionSnapshot(BaseEntity):
    """Composition with member details joined in."""

    council_id: str
    council_name: str
    president: SeatHolder | None = None
    vice_president: SeatHolder | None = None
    board_treasurer: SeatHolder | None = None
    board_secretary: SeatHolder | None = None
    board_members: list[SeatHolder] = field(default_factory=list)
    total_positions: int = 0

    def occupants(self, position_type: PositionType) -> list[SeatHolder]:
        return _occupants(self, position_type)


# Snapshot attribute holding each singular seat.
SINGULAR_SLOTS: dict[PositionType, str] = {
    PositionType.PRESIDENT: "president",
    PositionType.VICE_PRESIDENT: "vice_president",
    PositionType.BOARD_TREASURER: "board_treasurer",
    PositionType.BOARD_SECRETARY: "board_secretary",
}


def _occupants(snapshot, position_type: PositionType) -> list:
    match position_type:
        case PositionType.BOARD_MEMBER:
            return list(snapshot.board_members)
        case PositionType.NON_COUNCIL:
            return []
        case _:
            holder = getattr(snapshot, SINGULAR_SLOTS[position_type])
            return [holder] if holder is not None else []
