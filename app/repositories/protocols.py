"""Collaborator interfaces the council services depend on.

The DuckDB repositories implement these; anything with the same methods
(an in-memory fake, another database) can stand in for them.
"""

from contextlib import AbstractContextManager
from typing import Any, Protocol

from app.models.council import CouncilPosition, PositionType, Term
from app.models.member import MemberRecord


class MemberDirectory(Protocol):
    def find_by_id(self, member_id: str) -> MemberRecord | None: ...

    def update_council_cache(
        self,
        member_id: str,
        position_id: str | None,
        position: PositionType,
        is_council_member: bool,
    ) -> bool: ...


class TermStore(Protocol):
    def transaction(self) -> AbstractContextManager: ...

    def find_by_id(self, term_id: str) -> Term | None: ...

    def find_active(self) -> Term | None: ...

    def find_all(self) -> list[Term]: ...

    def insert(self, term: Term) -> str: ...

    def update_fields(self, term_id: str, fields: dict[str, Any]) -> bool: ...

    def bulk_deactivate_except(self, term_id: str | None) -> int: ...


class PositionStore(Protocol):
    def transaction(self) -> AbstractContextManager: ...

    def count_active(self, council_id: str, position: PositionType) -> int: ...

    def count_active_by_type(self, council_id: str) -> dict[PositionType, int]: ...

    def insert(self, position: CouncilPosition) -> str: ...

    def find_by_id(self, position_id: str) -> CouncilPosition | None: ...

    def update_fields(self, position_id: str, fields: dict[str, Any]) -> bool: ...

    def find_all_by_council(self, council_id: str, active_only: bool = True) -> list[CouncilPosition]: ...

    def find_all_by_member(self, member_id: str) -> list[CouncilPosition]: ...

    def find_active_by_member(self, member_id: str, council_id: str | None = None) -> list[CouncilPosition]: ...

    def claim_seat(self, position: CouncilPosition, capacity: int) -> int: ...

    def move_seat(self, position: CouncilPosition, new_type: PositionType, capacity: int) -> int: ...

    def release_seat(self, position_id: str) -> None: ...
