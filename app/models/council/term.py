"""Council term model."""

from dataclasses import dataclass
from datetime import datetime

from app.models.common import BaseEntity


@dataclass
class Term(BaseEntity):
    """A bounded period of council governance, e.g. "Twenty Fifth Council"."""

    id: str
    name: str
    start_date: datetime
    end_date: datetime | None = None
    is_active: bool = False
    description: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        self.description = self.description or ""


COUNCIL_DDL = """
CREATE TABLE IF NOT EXISTS council (
    id VARCHAR PRIMARY KEY,
    name VARCHAR NOT NULL,
    start_date TIMESTAMP NOT NULL,
    end_date TIMESTAMP,
    is_active BOOLEAN NOT NULL DEFAULT FALSE,
    description VARCHAR,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""
