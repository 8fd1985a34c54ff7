"""Council term lifecycle - creation, updates and exclusive activation."""

from datetime import datetime
from typing import Any
from uuid import uuid4

import pydantic
from loguru import logger

from app.errors import NotFoundError, ValidationError
from app.models.common import utcnow
from app.models.council import Term, TermPatch
from app.repositories.protocols import TermStore
from app.services.council.composition import parse_date, require_id
from app.services.council.locks import ACTIVATION_KEY, KeyedLocks, check_deadline, council_locks, deadline_after
from settings import LOCK_TIMEOUT


class CouncilTermService:
    """Council terms. At most one term is active at any time.

    Activation clears every other term's flag before setting the target's,
    inside one transaction and under a process-wide activation lock.
    """

    def __init__(self, term_repo: TermStore, locks: KeyedLocks | None = None, lock_timeout: float = LOCK_TIMEOUT):
        self._terms = term_repo
        self._locks = locks or council_locks
        self._lock_timeout = lock_timeout

    def get_term(self, term_id: str) -> Term:
        term = self._terms.find_by_id(require_id(term_id, "council_id"))
        if term is None:
            raise NotFoundError("council", term_id)
        return term

    def get_active_term(self) -> Term:
        term = self._terms.find_active()
        if term is None:
            raise NotFoundError("council", "active")
        return term

    def get_all_terms(self) -> list[Term]:
        return self._terms.find_all()

    def create_term(
        self,
        name: str,
        start_date: datetime | str,
        end_date: datetime | str | None = None,
        description: str = "",
        is_active: bool = False,
        timeout: float | None = None,
    ) -> Term:
        """Create a term. Creating it active deactivates every other term."""
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("name is required")
        start = parse_date(start_date, "start_date")
        if start is None:
            raise ValidationError("start_date is required")
        end = parse_date(end_date, "end_date")
        if end is not None and end < start:
            raise ValidationError("end_date must not be before start_date")

        now = utcnow()
        term = Term(
            id=uuid4().hex,
            name=name.strip(),
            start_date=start,
            end_date=end,
            is_active=is_active,
            description=description or "",
            created_at=now,
            updated_at=now,
        )

        if not is_active:
            self._terms.insert(term)
        else:
            deadline = deadline_after(self._lock_timeout if timeout is None else timeout)
            with self._locks.hold(ACTIVATION_KEY, deadline, "create_term"), self._terms.transaction():
                self._terms.bulk_deactivate_except(term.id)
                self._terms.insert(term)
                check_deadline(deadline, "create_term")

        logger.info("Created council {} ({}){}", term.name, term.id, " [ACTIVE]" if is_active else "")
        return term

    def update_term(self, term_id: str, patch: TermPatch | dict[str, Any], timeout: float | None = None) -> Term:
        """Update a term. Setting is_active=True deactivates every other term."""
        if isinstance(patch, dict):
            try:
                patch = TermPatch.model_validate(patch)
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid council update: {e.errors()[0]['msg']}") from e

        current = self.get_term(term_id)
        fields: dict[str, Any] = {}
        if patch.name is not None:
            if not patch.name.strip():
                raise ValidationError("name must not be empty")
            fields["name"] = patch.name.strip()
        if patch.start_date is not None:
            fields["start_date"] = parse_date(patch.start_date, "start_date")
        if "end_date" in patch.model_fields_set:
            fields["end_date"] = parse_date(patch.end_date, "end_date")
        if patch.description is not None:
            fields["description"] = patch.description
        if patch.is_active is not None:
            fields["is_active"] = patch.is_active

        start = fields.get("start_date", current.start_date)
        end = fields.get("end_date", current.end_date)
        if end is not None and end < start:
            raise ValidationError("end_date must not be before start_date")

        if fields.get("is_active"):
            deadline = deadline_after(self._lock_timeout if timeout is None else timeout)
            with self._locks.hold(ACTIVATION_KEY, deadline, "update_term"), self._terms.transaction():
                self._terms.bulk_deactivate_except(current.id)
                if not self._terms.update_fields(current.id, fields):
                    raise NotFoundError("council", current.id)
                check_deadline(deadline, "update_term")
            logger.info("Activated council {} ({})", current.name, current.id)
        elif not self._terms.update_fields(current.id, fields):
            raise NotFoundError("council", current.id)

        return self.get_term(current.id)

    def activate_term(self, term_id: str, timeout: float | None = None) -> Term:
        return self.update_term(term_id, TermPatch(is_active=True), timeout=timeout)

    def deactivate_term(self, term_id: str) -> Term:
        return self.update_term(term_id, TermPatch(is_active=False))
