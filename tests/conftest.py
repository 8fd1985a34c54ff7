"""Shared fixtures: a fresh DuckDB file per test and wired services."""

import sys
from datetime import datetime
from pathlib import Path
from uuid import uuid4

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.container import container
from app.models.member import MemberRecord
from app.repositories import close_db, configure, get_db


@pytest.fixture
def db(tmp_path):
    configure(tmp_path / "council.duckdb")
    get_db()
    yield
    close_db()


@pytest.fixture
def services(db):
    container.reset()
    container.init()
    yield container
    container.reset()


@pytest.fixture
def engine(services):
    return services.council


@pytest.fixture
def make_member(services):
    def make(first_name: str = "Test", last_name: str | None = None) -> MemberRecord:
        member = MemberRecord(
            id=uuid4().hex,
            first_name=first_name,
            last_name=last_name or uuid4().hex[:6],
            email=f"{first_name.lower()}@example.org",
        )
        services.member_repo.insert(member)
        return member

    return make


@pytest.fixture
def term(services):
    return services.terms.create_term(
        name="Twenty Fifth Council",
        start_date=datetime(2025, 1, 1),
        end_date=datetime(2026, 12, 31),
        is_active=True,
    )
