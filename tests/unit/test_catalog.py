"""Tests for the position catalog."""

import pytest

from app import catalog
from app.errors import InvalidPositionTypeError
from app.models.council import PositionType


class TestCapacity:
    def test_singular_seats(self):
        for kind in (
            PositionType.PRESIDENT,
            PositionType.VICE_PRESIDENT,
            PositionType.BOARD_TREASURER,
            PositionType.BOARD_SECRETARY,
        ):
            assert catalog.max_capacity(kind) == 1

    def test_board_members(self):
        assert catalog.max_capacity(PositionType.BOARD_MEMBER) == 6

    def test_non_council_unlimited(self):
        assert catalog.max_capacity(PositionType.NON_COUNCIL) == catalog.UNLIMITED == -1
        assert catalog.is_unlimited(PositionType.NON_COUNCIL)

    def test_every_type_has_capacity_and_rank(self):
        for kind in PositionType:
            assert isinstance(catalog.max_capacity(kind), int)
            assert catalog.priority_rank(kind) != catalog.UNKNOWN_RANK


class TestClassification:
    def test_council_seat(self):
        assert catalog.is_council_seat(PositionType.BOARD_MEMBER)
        assert not catalog.is_council_seat(PositionType.NON_COUNCIL)

    def test_council_seats_excludes_non_council(self):
        seats = catalog.council_seats()
        assert PositionType.NON_COUNCIL not in seats
        assert len(seats) == 5

    def test_leadership(self):
        assert catalog.is_leadership(PositionType.PRESIDENT)
        assert catalog.is_leadership(PositionType.VICE_PRESIDENT)
        assert not catalog.is_leadership(PositionType.BOARD_TREASURER)
        assert not catalog.is_leadership(PositionType.NON_COUNCIL)


class TestPriority:
    def test_order(self):
        assert catalog.all_position_types() == [
            PositionType.PRESIDENT,
            PositionType.VICE_PRESIDENT,
            PositionType.BOARD_TREASURER,
            PositionType.BOARD_SECRETARY,
            PositionType.BOARD_MEMBER,
            PositionType.NON_COUNCIL,
        ]

    def test_ranks(self):
        assert [catalog.priority_rank(k) for k in catalog.all_position_types()] == [1, 2, 3, 4, 5, 6]

    def test_unknown_ranks_last(self):
        assert catalog.priority_rank("Chancellor") == catalog.UNKNOWN_RANK
        assert catalog.priority_rank("Chancellor") > catalog.priority_rank(PositionType.NON_COUNCIL)


class TestParse:
    @pytest.mark.parametrize("raw", ["Vice President", "VICE_PRESIDENT", "VicePresident", "vice president"])
    def test_accepts_label_and_names(self, raw):
        assert PositionType.parse(raw) is PositionType.VICE_PRESIDENT

    def test_non_council_label(self):
        assert PositionType.parse("Non-Council Member") is PositionType.NON_COUNCIL

    @pytest.mark.parametrize("raw", ["", "  ", "Chancellor", None, 5])
    def test_rejects_unknown(self, raw):
        with pytest.raises(InvalidPositionTypeError):
            PositionType.parse(raw)
