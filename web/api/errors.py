"""API errors and validation helpers."""

import re

from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from app.errors import CouncilError, NotFoundError, StoreUnavailableError, ValidationError
from settings import STORE_RETRY_ATTEMPTS

__all__ = [
    "CouncilError",
    "NotFoundError",
    "ValidationError",
    "store_retry",
    "validate_id",
]

# Identifiers are uuid4 hex strings
_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def validate_id(value: str | None, field: str) -> str:
    """Validate an identifier from the request."""
    if not value:
        raise ValidationError(f"{field} is required")
    value = value.strip().lower()
    if not _ID_PATTERN.match(value):
        raise ValidationError(f"Invalid {field}: {value}")
    return value


def _is_retryable_error(exc: BaseException) -> bool:
    """Only transient store failures are retried; rule violations are final."""
    return isinstance(exc, StoreUnavailableError)


store_retry = retry(
    stop=stop_after_attempt(STORE_RETRY_ATTEMPTS),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
    retry=retry_if_exception(_is_retryable_error),
    reraise=True,
)
