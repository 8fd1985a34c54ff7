"""Common models - base classes and time helpers."""

from app.models.common.base import BaseEntity
from app.models.common.clock import to_naive_utc, utcnow

__all__ = [
    "BaseEntity",
    "to_naive_utc",
    "utcnow",
]
