"""Concurrent writers against one council."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from app.errors import CapacityExceededError, DuplicateActiveAssignmentError, StoreUnavailableError
from app.models.council import PositionType
from app.repositories import close_db
from app.services.council import CouncilCompositionEngine, KeyedLocks


def _run_all(calls):
    """Run calls on worker threads; return (results, errors)."""

    def call(fn):
        try:
            return fn(), None
        except Exception as e:
            return None, e
        finally:
            close_db()

    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        outcomes = list(pool.map(call, calls))
    return [r for r, _ in outcomes if r is not None], [e for _, e in outcomes if e is not None]


class TestConcurrentAssignment:
    def test_board_never_overfilled(self, engine, term, make_member):
        members = [make_member() for _ in range(10)]

        results, errors = _run_all(
            [lambda m=m: engine.assign_position(term.id, m.id, PositionType.BOARD_MEMBER) for m in members]
        )

        assert len(results) == 6
        assert len(errors) == 4
        assert all(isinstance(e, CapacityExceededError) for e in errors)
        assert len(engine.get_composition(term.id).board_members) == 6
        assert engine.get_available_positions(term.id)[PositionType.BOARD_MEMBER] == 0

    def test_single_president(self, engine, term, make_member):
        members = [make_member() for _ in range(5)]

        results, errors = _run_all(
            [lambda m=m: engine.assign_position(term.id, m.id, PositionType.PRESIDENT) for m in members]
        )

        assert len(results) == 1
        assert all(isinstance(e, CapacityExceededError) for e in errors)
        assert engine.get_composition(term.id).president.id == results[0].id

    def test_member_takes_one_seat(self, engine, term, make_member):
        member = make_member()
        kinds = [
            PositionType.PRESIDENT,
            PositionType.VICE_PRESIDENT,
            PositionType.BOARD_TREASURER,
            PositionType.BOARD_SECRETARY,
            PositionType.BOARD_MEMBER,
        ]

        results, errors = _run_all([lambda k=k: engine.assign_position(term.id, member.id, k) for k in kinds])

        assert len(results) == 1
        assert all(isinstance(e, DuplicateActiveAssignmentError) for e in errors)
        assert len(engine.get_member_history(member.id)) == 1


class TestConcurrentActivation:
    def test_one_active_term(self, services):
        terms = [services.terms.create_term(name=f"Council {n}", start_date=f"20{10 + n}-01-01") for n in range(6)]

        results, errors = _run_all([lambda t=t: services.terms.activate_term(t.id) for t in terms])

        assert errors == []
        assert len(results) == 6
        assert services.term_repo.count_active() == 1


class TestWritersOutsideSharedLock:
    def test_seat_tables_keep_single_president(self, services, term, make_member):
        engines = [
            CouncilCompositionEngine(
                services.term_repo,
                services.position_repo,
                services.member_repo,
                locks=KeyedLocks(),
            )
            for _ in range(8)
        ]
        members = [make_member() for _ in engines]

        results, errors = _run_all(
            [
                lambda e=e, m=m: e.assign_position(term.id, m.id, PositionType.PRESIDENT)
                for e, m in zip(engines, members)
            ]
        )

        assert len(results) <= 1
        assert all(isinstance(e, (CapacityExceededError, StoreUnavailableError)) for e in errors)
        assert services.position_repo.count_active(term.id, PositionType.PRESIDENT) == len(results)

        if results:
            loser = next(m for m in members if m.id != results[0].member_id)
            with pytest.raises(CapacityExceededError):
                services.council.assign_position(term.id, loser.id, PositionType.PRESIDENT)
