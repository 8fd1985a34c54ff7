"""Partial-update payloads for terms and seat assignments."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PositionPatch(BaseModel):
    """Mutable assignment fields. Member and council references are fixed."""

    model_config = ConfigDict(extra="forbid")

    position: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class TermPatch(BaseModel):
    """Mutable term fields."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_active: bool | None = None
    description: str | None = None
