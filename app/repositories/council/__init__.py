"""Council repositories."""

from app.repositories.council.position import PositionRepository
from app.repositories.council.term import TermRepository

__all__ = [
    "PositionRepository",
    "TermRepository",
]
