"""Tests for seat assignment rules."""

from datetime import datetime, timedelta

import pytest

from app.errors import (
    CapacityExceededError,
    DuplicateActiveAssignmentError,
    InvalidPositionTypeError,
    NotFoundError,
    ValidationError,
)
from app.models.common import utcnow
from app.models.council import PositionType


class TestAssignPosition:
    def test_creates_active_record(self, engine, term, make_member):
        member = make_member("Elie")
        position = engine.assign_position(term.id, member.id, PositionType.PRESIDENT, datetime(2025, 1, 1))

        assert position.is_active
        assert position.end_date is None
        assert position.position is PositionType.PRESIDENT
        assert position.council_id == term.id
        assert position.member_id == member.id
        assert engine.get_position(position.id) == position

    def test_accepts_label(self, engine, term, make_member):
        position = engine.assign_position(term.id, make_member().id, "Board Treasurer")
        assert position.position is PositionType.BOARD_TREASURER

    def test_start_defaults_to_now(self, engine, term, make_member):
        before = utcnow()
        position = engine.assign_position(term.id, make_member().id, PositionType.BOARD_MEMBER)
        assert before <= position.start_date <= utcnow() + timedelta(seconds=1)

    def test_start_date_string(self, engine, term, make_member):
        position = engine.assign_position(term.id, make_member().id, PositionType.BOARD_MEMBER, "2025-03-01")
        assert position.start_date == datetime(2025, 3, 1)

    def test_sets_member_cache(self, engine, services, term, make_member):
        member = make_member()
        position = engine.assign_position(term.id, member.id, PositionType.VICE_PRESIDENT)

        cached = services.member_repo.find_by_id(member.id)
        assert cached.council_position == "Vice President"
        assert cached.is_council_member
        assert cached.current_position_id == position.id


class TestCapacity:
    def test_seventh_board_member_rejected(self, engine, term, make_member):
        for _ in range(6):
            engine.assign_position(term.id, make_member().id, PositionType.BOARD_MEMBER)

        with pytest.raises(CapacityExceededError) as exc:
            engine.assign_position(term.id, make_member().id, PositionType.BOARD_MEMBER)

        assert "no available slots" in exc.value.message
        assert engine.get_available_positions(term.id)[PositionType.BOARD_MEMBER] == 0
        assert len(engine.get_composition(term.id).board_members) == 6

    def test_second_president_rejected(self, engine, term, make_member):
        engine.assign_position(term.id, make_member().id, PositionType.PRESIDENT)
        with pytest.raises(CapacityExceededError):
            engine.assign_position(term.id, make_member().id, PositionType.PRESIDENT)

    def test_capacity_checked_before_duplicate(self, engine, term, make_member):
        member = make_member()
        engine.assign_position(term.id, member.id, PositionType.PRESIDENT)
        with pytest.raises(CapacityExceededError):
            engine.assign_position(term.id, member.id, PositionType.PRESIDENT)

    def test_capacity_is_per_term(self, engine, services, term, make_member):
        other = services.terms.create_term(name="Twenty Fourth Council", start_date="2024-01-01")
        engine.assign_position(term.id, make_member().id, PositionType.PRESIDENT)
        engine.assign_position(other.id, make_member().id, PositionType.PRESIDENT)


class TestDuplicate:
    def test_same_member_two_seats(self, engine, term, make_member):
        member = make_member()
        engine.assign_position(term.id, member.id, PositionType.PRESIDENT)

        with pytest.raises(DuplicateActiveAssignmentError):
            engine.assign_position(term.id, member.id, PositionType.VICE_PRESIDENT)

        assert engine.get_composition(term.id).vice_president is None
        assert len(engine.get_member_history(member.id)) == 1

    def test_same_member_other_term_allowed(self, engine, services, term, make_member):
        member = make_member()
        other = services.terms.create_term(name="Twenty Fourth Council", start_date="2024-01-01")
        engine.assign_position(term.id, member.id, PositionType.PRESIDENT)
        engine.assign_position(other.id, member.id, PositionType.BOARD_MEMBER)

        cached = services.member_repo.find_by_id(member.id)
        assert cached.council_position == "President"


class TestRejectedInput:
    def test_non_council(self, engine, term, make_member):
        with pytest.raises(InvalidPositionTypeError):
            engine.assign_position(term.id, make_member().id, PositionType.NON_COUNCIL)

    def test_unknown_type(self, engine, term, make_member):
        with pytest.raises(InvalidPositionTypeError):
            engine.assign_position(term.id, make_member().id, "Chancellor")

    @pytest.mark.parametrize("term_id, member_id", [("", "m"), ("t", ""), (None, "m"), ("t", "   ")])
    def test_missing_ids(self, engine, term_id, member_id):
        with pytest.raises(ValidationError):
            engine.assign_position(term_id, member_id, PositionType.BOARD_MEMBER)

    def test_unknown_term(self, engine, make_member):
        with pytest.raises(NotFoundError) as exc:
            engine.assign_position("0" * 32, make_member().id, PositionType.BOARD_MEMBER)
        assert exc.value.kind == "council"

    def test_unknown_member(self, engine, term):
        with pytest.raises(NotFoundError) as exc:
            engine.assign_position(term.id, "0" * 32, PositionType.BOARD_MEMBER)
        assert exc.value.kind == "member"

    def test_malformed_date(self, engine, term, make_member):
        with pytest.raises(ValidationError):
            engine.assign_position(term.id, make_member().id, PositionType.BOARD_MEMBER, "next tuesday")

    def test_failed_assignment_leaves_no_record(self, engine, term, make_member):
        member = make_member()
        with pytest.raises(InvalidPositionTypeError):
            engine.assign_position(term.id, member.id, "Non-Council Member")
        assert engine.get_member_history(member.id) == []
        assert engine.get_composition(term.id).total_positions == 0
