"""Council API views - thin layer over services."""

from typing import Any

import pydantic

from app.container import container
from app.models.council import CompositionSnapshot, CouncilPosition, PositionPatch, SeatHolder, Term, TermPatch
from app.models.member import MemberRecord
from web.api.errors import ValidationError, store_retry, validate_id

from .schemas import (
    AssignPositionRequest,
    AvailabilityResponse,
    AvailablePositionsResponse,
    CompositionResponse,
    CouncilItem,
    CouncilsResponse,
    CreateCouncilRequest,
    DetailedCompositionResponse,
    MemberHistoryResponse,
    MemberItem,
    PositionItem,
    SeatHolderItem,
)


def _parse(model: type[pydantic.BaseModel], payload: dict[str, Any]):
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"]) or "body"
        raise ValidationError(f"Invalid request body: {field}: {first['msg']}") from e


def _council_item(t: Term) -> CouncilItem:
    return CouncilItem(
        id=t.id,
        name=t.name,
        start_date=t.start_date,
        end_date=t.end_date,
        is_active=t.is_active,
        description=t.description,
    )


def _position_item(p: CouncilPosition | None) -> PositionItem | None:
    if p is None:
        return None
    return PositionItem(
        id=p.id,
        member_id=p.member_id,
        council_id=p.council_id,
        position=p.position.value,
        start_date=p.start_date,
        end_date=p.end_date,
        is_active=p.is_active,
        is_term_active=p.is_term_active(),
    )


def _member_item(m: MemberRecord) -> MemberItem:
    return MemberItem(
        id=m.id,
        full_name=m.full_name,
        email=m.email,
        council_position=m.council_position,
        is_council_member=m.is_council_member,
    )


def _holder_item(h: SeatHolder | None) -> SeatHolderItem | None:
    if h is None:
        return None
    return SeatHolderItem(position=_position_item(h.position), member=_member_item(h.member))


# ========== Councils ==========


def get_all_councils() -> CouncilsResponse:
    """Get all councils."""
    terms = container.terms.get_all_terms()
    active = next((t.id for t in terms if t.is_active), None)
    return CouncilsResponse(items=[_council_item(t) for t in terms], active_id=active)


def get_active_council() -> CouncilItem:
    """Get the active council."""
    return _council_item(container.terms.get_active_term())


def get_council(council_id: str) -> CouncilItem:
    """Get a council by id."""
    return _council_item(container.terms.get_term(validate_id(council_id, "council_id")))


@store_retry
def create_council(payload: dict[str, Any]) -> CouncilItem:
    """Create a council."""
    request = _parse(CreateCouncilRequest, payload)
    term = container.terms.create_term(
        name=request.name,
        start_date=request.start_date,
        end_date=request.end_date,
        description=request.description,
        is_active=request.is_active,
    )
    return _council_item(term)


@store_retry
def update_council(council_id: str, payload: dict[str, Any]) -> CouncilItem:
    """Update a council."""
    council_id = validate_id(council_id, "council_id")
    patch = _parse(TermPatch, payload)
    return _council_item(container.terms.update_term(council_id, patch))


@store_retry
def deactivate_council(council_id: str) -> CouncilItem:
    """Deactivate a council."""
    return _council_item(container.terms.deactivate_term(validate_id(council_id, "council_id")))


# ========== Composition ==========


def _composition_response(c: CompositionSnapshot, issues: list[str]) -> CompositionResponse:
    return CompositionResponse(
        council_id=c.council_id,
        president=_position_item(c.president),
        vice_president=_position_item(c.vice_president),
        board_treasurer=_position_item(c.board_treasurer),
        board_secretary=_position_item(c.board_secretary),
        board_members=[_position_item(p) for p in c.board_members],
        total_positions=c.total_positions,
        issues=issues,
    )


def get_composition(council_id: str) -> CompositionResponse:
    """Get composition (ids only) with completeness issues."""
    council_id = validate_id(council_id, "council_id")
    snapshot = container.council.get_composition(council_id)
    issues = container.council.validate_composition(council_id)
    return _composition_response(snapshot, issues)


def get_composition_details(council_id: str) -> DetailedCompositionResponse:
    """Get composition with member details."""
    c = container.council.get_composition_with_details(validate_id(council_id, "council_id"))
    return DetailedCompositionResponse(
        council_id=c.council_id,
        council_name=c.council_name,
        president=_holder_item(c.president),
        vice_president=_holder_item(c.vice_president),
        board_treasurer=_holder_item(c.board_treasurer),
        board_secretary=_holder_item(c.board_secretary),
        board_members=[_holder_item(h) for h in c.board_members],
        total_positions=c.total_positions,
    )


def get_available_positions(council_id: str) -> AvailablePositionsResponse:
    """Get available position slots."""
    council_id = validate_id(council_id, "council_id")
    available = container.council.get_available_positions(council_id)
    return AvailablePositionsResponse(
        council_id=council_id,
        available={kind.value: slots for kind, slots in available.items()},
    )


def validate_position(council_id: str, position: str) -> AvailabilityResponse:
    """Check whether a position type has a free slot."""
    council_id = validate_id(council_id, "council_id")
    if not position:
        raise ValidationError("position query parameter is required")
    available = container.council.validate_position_availability(council_id, position)
    return AvailabilityResponse(council_id=council_id, position=position, available=available)


# ========== Positions ==========


@store_retry
def assign_position(payload: dict[str, Any]) -> PositionItem:
    """Assign a member to a council position."""
    request = _parse(AssignPositionRequest, payload)
    member_id = validate_id(request.member_id, "member_id")
    council_id = validate_id(request.council_id, "council_id")
    position = container.council.assign_position(council_id, member_id, request.position, request.start_date)
    return _position_item(position)


def get_position(position_id: str) -> PositionItem:
    """Get a position by id."""
    return _position_item(container.council.get_position(validate_id(position_id, "position_id")))


@store_retry
def update_position(position_id: str, payload: dict[str, Any]) -> PositionItem:
    """Update a council position."""
    position_id = validate_id(position_id, "position_id")
    patch = _parse(PositionPatch, payload)
    return _position_item(container.council.update_position(position_id, patch))


@store_retry
def remove_position(position_id: str) -> PositionItem:
    """Remove a member from a council position."""
    return _position_item(container.council.remove_position(validate_id(position_id, "position_id")))


def get_member_history(member_id: str) -> MemberHistoryResponse:
    """Get a member's council history."""
    member_id = validate_id(member_id, "member_id")
    history = container.council.get_member_history(member_id)
    return MemberHistoryResponse(member_id=member_id, items=[_position_item(p) for p in history])
