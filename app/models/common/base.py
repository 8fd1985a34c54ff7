"""Base entity class for all domain entities."""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any


@dataclass
class BaseEntity:
    """Base class for all entities."""

    def to_dict(self) -> dict[str, Any]:
        """Convert entity to dictionary."""
        return asdict(self)

    def copy(self, **changes: Any):
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_row(cls, columns: list[str], row: tuple):
        """Build an entity from a DB row, ignoring columns the entity does not declare."""
        known = {f.name for f in fields(cls)}
        return cls(**{c: v for c, v in zip(columns, row) if c in known})
