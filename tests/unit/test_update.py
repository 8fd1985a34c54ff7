"""Tests for editing assignments."""

from datetime import datetime

import pytest

from app.errors import CapacityExceededError, InvalidPositionTypeError, ValidationError
from app.models.council import PositionPatch, PositionType


@pytest.fixture
def board_seat(engine, term, make_member):
    member = make_member()
    return engine.assign_position(term.id, member.id, PositionType.BOARD_MEMBER, datetime(2025, 1, 1))


class TestUpdateDates:
    def test_start_and_end(self, engine, board_seat):
        updated = engine.update_position(
            board_seat.id,
            {"start_date": datetime(2025, 2, 1), "end_date": datetime(2025, 12, 31)},
        )
        assert updated.start_date == datetime(2025, 2, 1)
        assert updated.end_date == datetime(2025, 12, 31)
        assert updated.is_active

    def test_patch_model(self, engine, board_seat):
        updated = engine.update_position(board_seat.id, PositionPatch(end_date=datetime(2025, 6, 30)))
        assert updated.end_date == datetime(2025, 6, 30)

    def test_clear_end_date(self, engine, board_seat):
        engine.update_position(board_seat.id, {"end_date": datetime(2025, 12, 31)})
        cleared = engine.update_position(board_seat.id, {"end_date": None})
        assert cleared.end_date is None

    def test_end_before_start(self, engine, board_seat):
        with pytest.raises(ValidationError):
            engine.update_position(board_seat.id, {"end_date": datetime(2024, 12, 31)})
        assert engine.get_position(board_seat.id).end_date is None

    def test_empty_patch_returns_record(self, engine, board_seat):
        assert engine.update_position(board_seat.id, {}) == engine.get_position(board_seat.id)

    def test_unknown_field(self, engine, board_seat):
        with pytest.raises(ValidationError):
            engine.update_position(board_seat.id, {"member_id": "someone-else"})


class TestUpdateType:
    def test_change_to_free_seat(self, engine, services, term, board_seat):
        updated = engine.update_position(board_seat.id, {"position": "President"})

        assert updated.position is PositionType.PRESIDENT
        available = engine.get_available_positions(term.id)
        assert available[PositionType.PRESIDENT] == 0
        assert available[PositionType.BOARD_MEMBER] == 6
        cached = services.member_repo.find_by_id(board_seat.member_id)
        assert cached.council_position == "President"

    def test_change_to_full_seat(self, engine, term, board_seat, make_member):
        engine.assign_position(term.id, make_member().id, PositionType.PRESIDENT)

        with pytest.raises(CapacityExceededError):
            engine.update_position(board_seat.id, {"position": PositionType.PRESIDENT})

        assert engine.get_position(board_seat.id).position is PositionType.BOARD_MEMBER
        assert engine.get_available_positions(term.id)[PositionType.BOARD_MEMBER] == 5

    def test_non_council_rejected(self, engine, board_seat):
        with pytest.raises(InvalidPositionTypeError):
            engine.update_position(board_seat.id, {"position": "Non-Council Member"})

    def test_same_type_is_noop(self, engine, board_seat):
        updated = engine.update_position(board_seat.id, {"position": "Board Member"})
        assert updated.position is PositionType.BOARD_MEMBER

    def test_inactive_record_type_change(self, engine, term, board_seat, make_member):
        engine.remove_position(board_seat.id)
        engine.assign_position(term.id, make_member().id, PositionType.PRESIDENT)

        updated = engine.update_position(board_seat.id, {"position": "President"})
        assert updated.position is PositionType.PRESIDENT
        assert not updated.is_active
        assert engine.get_composition(term.id).total_positions == 1
