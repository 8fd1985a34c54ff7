"""Services package - service class exports."""

from app.services.council import CouncilCompositionEngine, CouncilTermService

__all__ = [
    "CouncilCompositionEngine",
    "CouncilTermService",
]
