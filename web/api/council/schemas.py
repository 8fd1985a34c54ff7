"""Council API request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateCouncilRequest(BaseModel):
    """Create council payload."""

    model_config = ConfigDict(extra="forbid")

    name: str
    start_date: datetime
    end_date: datetime | None = None
    is_active: bool = False
    description: str = ""


class AssignPositionRequest(BaseModel):
    """Assign position payload."""

    model_config = ConfigDict(extra="forbid")

    member_id: str = ""
    council_id: str = ""
    position: str
    start_date: datetime | None = None


class CouncilItem(BaseModel):
    """Council term."""

    id: str
    name: str
    start_date: datetime
    end_date: datetime | None
    is_active: bool
    description: str


class CouncilsResponse(BaseModel):
    """All councils, newest first."""

    items: list[CouncilItem]
    active_id: str | None


class PositionItem(BaseModel):
    """Seat assignment."""

    id: str
    member_id: str
    council_id: str
    position: str
    start_date: datetime
    end_date: datetime | None
    is_active: bool
    is_term_active: bool


class MemberItem(BaseModel):
    """Member summary."""

    id: str
    full_name: str
    email: str | None
    council_position: str
    is_council_member: bool


class SeatHolderItem(BaseModel):
    """Assignment with member details."""

    position: PositionItem
    member: MemberItem


class CompositionResponse(BaseModel):
    """Council composition."""

    council_id: str
    president: PositionItem | None
    vice_president: PositionItem | None
    board_treasurer: PositionItem | None
    board_secretary: PositionItem | None
    board_members: list[PositionItem]
    total_positions: int
    issues: list[str] = Field(default_factory=list)


class DetailedCompositionResponse(BaseModel):
    """Council composition with member details."""

    council_id: str
    council_name: str
    president: SeatHolderItem | None
    vice_president: SeatHolderItem | None
    board_treasurer: SeatHolderItem | None
    board_secretary: SeatHolderItem | None
    board_members: list[SeatHolderItem]
    total_positions: int


class AvailablePositionsResponse(BaseModel):
    """Remaining seats per position type."""

    council_id: str
    available: dict[str, int]


class AvailabilityResponse(BaseModel):
    """Availability of one position type."""

    council_id: str
    position: str
    available: bool


class MemberHistoryResponse(BaseModel):
    """A member's assignments across councils."""

    member_id: str
    items: list[PositionItem]
