"""Timestamp helpers.

DuckDB TIMESTAMP columns are naive, so everything is stored as naive UTC.
"""

from datetime import date, datetime, time, timezone


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | date | str | None) -> datetime | None:
    """Normalize a datetime, date or ISO string to naive UTC.

    Raises ValueError for strings that are not ISO 8601.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    elif not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
