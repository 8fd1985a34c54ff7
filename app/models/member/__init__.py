"""Member domain models."""

from app.models.member.member import MEMBER_DDL, MemberRecord

__all__ = [
    "MEMBER_DDL",
    "MemberRecord",
]
