#!/usr/bin/env python3
"""
Council maintenance commands.

Usage:
    python manage_council.py init                 # Create tables
    python manage_council.py seed                 # Demo council with ten seated members
    python manage_council.py status               # Terms and seat availability
    python manage_council.py validate             # Check composition of every term
    python manage_council.py reconcile            # Rebuild member council cache from assignments
    python manage_council.py status --db other.duckdb
"""

import sys
from pathlib import Path
from uuid import uuid4

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from app import catalog
from app.container import container
from app.models.council import PositionType
from app.models.member import MemberRecord
from app.repositories import configure, db_exists, get_db
from settings.logging import setup_logging

logger = setup_logging(level="INFO", to_file=True)

DEMO_COUNCIL = "Twenty Fifth Council"

DEMO_SEATS = [
    ("Elie", "Georges Abboud", PositionType.PRESIDENT),
    ("Mohamed", "Ali Blaik", PositionType.VICE_PRESIDENT),
    ("Jean", "Issa Rachid", PositionType.BOARD_TREASURER),
    ("Nabil", "Khoder Ghaith", PositionType.BOARD_SECRETARY),
    ("Fadi", "Haitham El Majari", PositionType.BOARD_MEMBER),
    ("Khalil", "Hussein Zeidan", PositionType.BOARD_MEMBER),
    ("Khalil", "Mohammad Ali Obeida", PositionType.BOARD_MEMBER),
    ("Graziella", "Antoine Hobeika", PositionType.BOARD_MEMBER),
    ("Simon", "Georges Staii", PositionType.BOARD_MEMBER),
    ("Nadim", "Antoine Daher", PositionType.BOARD_MEMBER),
]


def init_db() -> bool:
    """Create tables (idempotent). Returns True if the database file was new."""
    fresh = not db_exists()
    get_db()
    logger.info("Database ready ({})", "created" if fresh else "existing")
    return fresh


def seed() -> str:
    """Create an active demo council and seat a full board."""
    members = [
        MemberRecord(
            id=uuid4().hex,
            first_name=first,
            last_name=last,
            email=f"{first.lower()}.{last.lower().replace(' ', '')}@example.org",
            member_type="Practicing",
        )
        for first, last, _ in DEMO_SEATS
    ]
    container.member_repo.insert_many(members)

    term = container.terms.create_term(
        name=DEMO_COUNCIL,
        start_date="2025-01-01",
        end_date="2025-12-31",
        description="Current serving council for 2025",
        is_active=True,
    )
    for member, (_, _, position) in zip(members, DEMO_SEATS):
        container.council.assign_position(term.id, member.id, position, start_date=term.start_date)

    logger.info("Seeded {} with {} seats", term.name, len(members))
    return term.id


def show_status() -> None:
    """Print terms and remaining seats."""
    terms = container.terms.get_all_terms()
    if not terms:
        print("\n⚠️  No councils found. Run 'python manage_council.py seed' first.\n")
        return

    print("\n" + "=" * 60)
    print("COUNCILS")
    print("=" * 60)
    for term in terms:
        status = "ACTIVE" if term.is_active else "inactive"
        print(f"\n{term.name} [{status}]  id={term.id}")
        available = container.council.get_available_positions(term.id)
        for kind in catalog.council_seats():
            seats = catalog.max_capacity(kind)
            print(f"  {kind:<16} {seats - available[kind]}/{seats}")
    print("\n" + "=" * 60 + "\n")


def run_validation() -> bool:
    """Validate composition of every term."""
    terms = container.terms.get_all_terms()
    all_valid = True

    print("\n" + "=" * 60)
    print("COMPOSITION REPORT")
    print("=" * 60)
    for term in terms:
        issues = container.council.validate_composition(term.id)
        print(f"\n{term.name} {'✅' if not issues else '❌'}")
        for issue in issues:
            all_valid = False
            print(f"  ⚠️  {issue}")

    active = [t for t in terms if t.is_active]
    if len(active) > 1:
        all_valid = False
        print(f"\n❌ {len(active)} councils are marked active")

    print("\n" + "=" * 60)
    print("✅ All councils complete!" if all_valid else "❌ Some councils are incomplete.")
    print("=" * 60 + "\n")
    return all_valid


def reconcile() -> int:
    """Recompute cached council fields for every member."""
    member_ids = container.member_repo.all_ids()
    for member_id in member_ids:
        container.council.reconcile_member_cache(member_id)
    logger.info("Reconciled {} members", len(member_ids))
    return len(member_ids)


def main():
    args = sys.argv[1:]

    if "--db" in args:
        i = args.index("--db")
        if i + 1 >= len(args):
            print(__doc__)
            sys.exit(1)
        configure(args[i + 1])
        args = args[:i] + args[i + 2 :]

    container.init()
    command = args[0] if args else "status"

    if command == "init":
        init_db()
    elif command == "seed":
        seed()
        show_status()
    elif command == "status":
        show_status()
    elif command == "validate":
        sys.exit(0 if run_validation() else 1)
    elif command == "reconcile":
        reconcile()
    else:
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
