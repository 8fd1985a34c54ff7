"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.council import PositionRepository, TermRepository
from app.repositories.db import (
    close_db,
    configure,
    db_exists,
    get_db,
    init_tables,
    transaction,
)
from app.repositories.member import MemberRepository
from app.repositories.protocols import MemberDirectory, PositionStore, TermStore

__all__ = [
    # DB
    "get_db",
    "close_db",
    "configure",
    "db_exists",
    "init_tables",
    "transaction",
    # Base
    "BaseRepository",
    # Council
    "PositionRepository",
    "TermRepository",
    # Member
    "MemberRepository",
    # Interfaces
    "MemberDirectory",
    "PositionStore",
    "TermStore",
]
