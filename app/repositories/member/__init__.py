"""Member repositories."""

from app.repositories.member.member import MemberRepository

__all__ = [
    "MemberRepository",
]
