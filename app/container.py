"""Dependency Injection container - initialized at app startup."""

from app.repositories.council.position import PositionRepository
from app.repositories.council.term import TermRepository
from app.repositories.member.member import MemberRepository
from app.services.council.composition import CouncilCompositionEngine
from app.services.council.terms import CouncilTermService


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self) -> None:
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized:
            return

        # Repositories (singletons, connection looked up per thread)
        self.term_repo = TermRepository()
        self.position_repo = PositionRepository()
        self.member_repo = MemberRepository()

        # Services (with injected repos)
        self.terms = CouncilTermService(term_repo=self.term_repo)
        self.council = CouncilCompositionEngine(
            term_repo=self.term_repo,
            position_repo=self.position_repo,
            member_repo=self.member_repo,
        )

        self._initialized = True

    def reset(self) -> None:
        """Drop all instances; the next init() rebuilds them."""
        self._initialized = False


# Global container instance
container = Container()
