"""Council composition engine - seat assignment rules and composition views."""

from datetime import datetime
from typing import Any
from uuid import uuid4

import pydantic
from loguru import logger

from app import catalog
from app.errors import (
    CapacityExceededError,
    DuplicateActiveAssignmentError,
    InvalidPositionTypeError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from app.models.common import to_naive_utc, utcnow
from app.models.council import (
    SINGULAR_SLOTS,
    CompositionSnapshot,
    CouncilPosition,
    DetailedCompositionSnapshot,
    PositionPatch,
    PositionType,
    SeatHolder,
    Term,
)
from app.models.member import MemberRecord
from app.repositories.protocols import MemberDirectory, PositionStore, TermStore
from app.services.council.locks import KeyedLocks, check_deadline, council_locks, deadline_after
from settings import LOCK_TIMEOUT


def require_id(value: str | None, field: str) -> str:
    """Reject missing identifiers."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def parse_date(value: datetime | str | None, field: str) -> datetime | None:
    """Normalize a date input to naive UTC, ValidationError if malformed."""
    try:
        return to_naive_utc(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {field}: {value!r}") from e


def council_seat(position_type: PositionType | str) -> PositionType:
    """Parse a position type and reject NonCouncil."""
    kind = PositionType.parse(position_type)
    if not catalog.is_council_seat(kind):
        raise InvalidPositionTypeError(position_type)
    return kind


def remaining_slots(snapshot: CompositionSnapshot, position_type: PositionType) -> int:
    """Free seats of a type in a snapshot; UNLIMITED for NonCouncil."""
    capacity = catalog.max_capacity(position_type)
    if capacity == catalog.UNLIMITED:
        return catalog.UNLIMITED
    return capacity - len(snapshot.occupants(position_type))


def _display_order(positions: list[CouncilPosition]) -> list[CouncilPosition]:
    """Active first, then by seat priority and start date."""
    return sorted(
        positions,
        key=lambda p: (not p.is_active, catalog.priority_rank(p.position), p.start_date, p.id),
    )


def _bucket(snapshot, position: CouncilPosition, entry: Any) -> None:
    """Place an entry in its seat. An active assignment wins a singular seat over history."""
    match position.position:
        case PositionType.BOARD_MEMBER:
            snapshot.board_members.append(entry)
        case PositionType.NON_COUNCIL:
            pass
        case (
            PositionType.PRESIDENT
            | PositionType.VICE_PRESIDENT
            | PositionType.BOARD_TREASURER
            | PositionType.BOARD_SECRETARY
        ):
            slot = SINGULAR_SLOTS[position.position]
            current = getattr(snapshot, slot)
            if current is None:
                setattr(snapshot, slot, entry)


class CouncilCompositionEngine:
    """Assigns members to council seats and builds composition views.

    Stateless between calls: every read goes to the stores. Writes for one
    council are serialized through a per-council lock and run in a single
    transaction; the seat claim tables reject anything that slips past.
    """

    def __init__(
        self,
        term_repo: TermStore,
        position_repo: PositionStore,
        member_repo: MemberDirectory,
        locks: KeyedLocks | None = None,
        lock_timeout: float = LOCK_TIMEOUT,
    ):
        self._terms = term_repo
        self._positions = position_repo
        self._members = member_repo
        self._locks = locks or council_locks
        self._lock_timeout = lock_timeout
        logger.debug("CouncilCompositionEngine initialized")

    def _deadline(self, timeout: float | None) -> float | None:
        return deadline_after(self._lock_timeout if timeout is None else timeout)

    def _require_term(self, term_id: str) -> Term:
        term = self._terms.find_by_id(require_id(term_id, "council_id"))
        if term is None:
            raise NotFoundError("council", term_id)
        return term

    def _require_position(self, position_id: str) -> CouncilPosition:
        position = self._positions.find_by_id(require_id(position_id, "position_id"))
        if position is None:
            raise NotFoundError("council position", position_id)
        return position

    # ========== Assignment ==========

    def assign_position(
        self,
        term_id: str,
        member_id: str,
        position_type: PositionType | str,
        start_date: datetime | str | None = None,
        timeout: float | None = None,
    ) -> CouncilPosition:
        """Appoint a member to a seat in a council term.

        Raises CapacityExceededError if the seat type is full and
        DuplicateActiveAssignmentError if the member already sits in this
        council. Capacity is checked first.
        """
        term_id = require_id(term_id, "council_id")
        member_id = require_id(member_id, "member_id")
        kind = council_seat(position_type)
        start = parse_date(start_date, "start_date") or utcnow()
        deadline = self._deadline(timeout)
        capacity = catalog.max_capacity(kind)

        with self._locks.hold(term_id, deadline, "assign_position"):
            self._require_term(term_id)
            if self._members.find_by_id(member_id) is None:
                raise NotFoundError("member", member_id)

            with self._positions.transaction():
                if self._positions.count_active(term_id, kind) >= capacity:
                    raise CapacityExceededError(kind, term_id)
                if self._positions.find_active_by_member(member_id, term_id):
                    raise DuplicateActiveAssignmentError(member_id, term_id)

                now = utcnow()
                position = CouncilPosition(
                    id=uuid4().hex,
                    member_id=member_id,
                    council_id=term_id,
                    position=kind,
                    start_date=start,
                    end_date=None,
                    is_active=True,
                    created_at=now,
                    updated_at=now,
                )
                self._positions.insert(position)
                self._positions.claim_seat(position, capacity)
                if not self._refresh_member_cache(member_id):
                    raise NotFoundError("member", member_id)
                check_deadline(deadline, "assign_position")

        logger.info("Assigned {} as {} in council {} ({})", member_id, kind, term_id, position.id)
        return position

    def remove_position(self, position_id: str, timeout: float | None = None) -> CouncilPosition:
        """End an assignment: inactive, end date now. Never deletes.

        Removing an already inactive assignment is a no-op that returns the
        stored record unchanged.
        """
        position = self._require_position(position_id)
        if not position.is_active:
            logger.debug("Position {} already inactive, nothing to remove", position.id)
            return position

        deadline = self._deadline(timeout)
        with self._locks.hold(position.council_id, deadline, "remove_position"):
            with self._positions.transaction():
                position = self._require_position(position.id)
                if not position.is_active:
                    return position

                now = utcnow()
                # Assignment first, then the member projection derived from it.
                self._positions.update_fields(position.id, {"is_active": False, "end_date": now})
                self._positions.release_seat(position.id)
                if not self._refresh_member_cache(position.member_id):
                    logger.warning("Member {} not in directory, cache not reset", position.member_id)
                check_deadline(deadline, "remove_position")

        logger.info("Removed {} from {} in council {}", position.member_id, position.position, position.council_id)
        return position.copy(is_active=False, end_date=now, updated_at=now)

    def update_position(
        self,
        position_id: str,
        patch: PositionPatch | dict[str, Any],
        timeout: float | None = None,
    ) -> CouncilPosition:
        """Change dates or seat type of an assignment.

        A type change on an active assignment is re-validated against
        capacity like a fresh appointment. Passing end_date=None clears it.
        """
        if isinstance(patch, dict):
            try:
                patch = PositionPatch.model_validate(patch)
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid position update: {e.errors()[0]['msg']}") from e

        position = self._require_position(position_id)
        new_type = council_seat(patch.position) if patch.position is not None else None
        deadline = self._deadline(timeout)

        with self._locks.hold(position.council_id, deadline, "update_position"):
            with self._positions.transaction():
                position = self._require_position(position.id)
                fields: dict[str, Any] = {}
                if new_type is not None and new_type is not position.position:
                    fields["position"] = new_type
                if patch.start_date is not None:
                    fields["start_date"] = parse_date(patch.start_date, "start_date")
                if "end_date" in patch.model_fields_set:
                    fields["end_date"] = parse_date(patch.end_date, "end_date")

                start = fields.get("start_date", position.start_date)
                end = fields.get("end_date", position.end_date)
                if end is not None and end < start:
                    raise ValidationError("end_date must not be before start_date")
                if not fields:
                    return position

                type_changed = "position" in fields and position.is_active
                if type_changed:
                    capacity = catalog.max_capacity(new_type)
                    if self._positions.count_active(position.council_id, new_type) >= capacity:
                        raise CapacityExceededError(new_type, position.council_id)
                    self._positions.move_seat(position, new_type, capacity)

                self._positions.update_fields(position.id, fields)
                if type_changed:
                    self._refresh_member_cache(position.member_id)
                check_deadline(deadline, "update_position")

        logger.info("Updated position {}: {}", position.id, sorted(fields))
        return self._require_position(position.id)

    # ========== Availability ==========

    def validate_position_availability(self, term_id: str, position_type: PositionType | str) -> bool:
        """True if the term has a free seat of this type (always for NonCouncil)."""
        kind = PositionType.parse(position_type)
        self._require_term(term_id)
        capacity = catalog.max_capacity(kind)
        if capacity == catalog.UNLIMITED:
            return True
        return self._positions.count_active(term_id, kind) < capacity

    def get_available_positions(self, term_id: str) -> dict[PositionType, int]:
        """Remaining seats per council seat type."""
        self._require_term(term_id)
        counts = self._positions.count_active_by_type(term_id)
        return {kind: catalog.max_capacity(kind) - counts.get(kind, 0) for kind in catalog.council_seats()}

    # ========== Composition ==========

    def get_composition(self, term_id: str) -> CompositionSnapshot:
        """Current occupants of every seat, from active assignments."""
        term = self._require_term(term_id)
        positions = self._positions.find_all_by_council(term.id, active_only=True)

        snapshot = CompositionSnapshot(council_id=term.id, total_positions=len(positions))
        for position in _display_order(positions):
            _bucket(snapshot, position, position)
        return snapshot

    def get_composition_with_details(self, term_id: str, include_inactive: bool = True) -> DetailedCompositionSnapshot:
        """Composition joined with member records.

        Assignments whose member cannot be loaded are skipped, not fatal.
        Inactive history is included unless include_inactive is False.
        """
        term = self._require_term(term_id)
        positions = self._positions.find_all_by_council(term.id, active_only=not include_inactive)

        snapshot = DetailedCompositionSnapshot(
            council_id=term.id,
            council_name=term.name,
            total_positions=len(positions),
        )
        skipped = 0
        for position in _display_order(positions):
            member = self._lookup_member(position.member_id)
            if member is None:
                skipped += 1
                continue
            _bucket(snapshot, position, SeatHolder(position=position, member=member))

        if skipped:
            logger.warning("Composition of council {}: skipped {} unresolved member(s)", term.id, skipped)
        return snapshot

    def _lookup_member(self, member_id: str) -> MemberRecord | None:
        try:
            return self._members.find_by_id(member_id)
        except StoreUnavailableError as e:
            logger.warning("Member lookup failed for {}: {}", member_id, e.message)
            return None

    def validate_composition(self, term_id: str) -> list[str]:
        """Issues that keep a council from being fully seated. Empty when complete."""
        snapshot = self.get_composition(term_id)
        issues = []
        for kind in catalog.council_seats():
            capacity = catalog.max_capacity(kind)
            seated = len(snapshot.occupants(kind))
            if kind is PositionType.BOARD_MEMBER:
                if seated != capacity:
                    issues.append(f"Council must have exactly {capacity} Board Members")
            elif seated == 0:
                issues.append(f"Council must have a {kind}")
        return issues

    # ========== Lookups ==========

    def get_position(self, position_id: str) -> CouncilPosition:
        return self._require_position(position_id)

    def get_member_history(self, member_id: str) -> list[CouncilPosition]:
        """Every assignment of a member across terms, newest first."""
        return self._positions.find_all_by_member(require_id(member_id, "member_id"))

    # ========== Member cache ==========

    def reconcile_member_cache(self, member_id: str) -> MemberRecord:
        """Recompute a member's cached council fields from their active assignments."""
        member_id = require_id(member_id, "member_id")
        with self._positions.transaction():
            if not self._refresh_member_cache(member_id):
                raise NotFoundError("member", member_id)
        member = self._members.find_by_id(member_id)
        logger.info("Reconciled member {}: {}", member_id, member.council_position)
        return member

    def _refresh_member_cache(self, member_id: str) -> bool:
        """Write the member projection. Returns False if the member is not in the directory.

        With several active seats (in different councils) the one in the
        active council wins, then the most recently created.
        """
        active = self._positions.find_active_by_member(member_id)
        if not active:
            return self._members.update_council_cache(member_id, None, PositionType.NON_COUNCIL, False)

        current = self._terms.find_active()
        current_id = current.id if current else None
        chosen = min(
            active,
            key=lambda p: (p.council_id != current_id, -(p.created_at or p.start_date).timestamp()),
        )
        return self._members.update_council_cache(member_id, chosen.id, chosen.position, True)
