"""Council services - seat assignment engine and term lifecycle."""

from app.services.council.composition import CouncilCompositionEngine, remaining_slots
from app.services.council.locks import KeyedLocks, council_locks
from app.services.council.terms import CouncilTermService

__all__ = [
    "CouncilCompositionEngine",
    "CouncilTermService",
    "KeyedLocks",
    "council_locks",
    "remaining_slots",
]
