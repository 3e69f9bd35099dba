"""
Membership entity.

Normalized form of the User <-> Group relation, stored in "memberships".
Group.memberIds and the membership records are kept consistent by the
group repository.
"""

from pydantic import Field

from .base import DocumentModel, now_ms


class Membership(DocumentModel):
    """One user's membership of one group."""

    id: str | None = None
    user_id: str
    group_id: str
    is_admin: bool = False
    joined_at: int = Field(default_factory=now_ms)

    @staticmethod
    def make_id(user_id: str, group_id: str) -> str:
        return f"{user_id}_{group_id}"

    @classmethod
    def for_member(cls, user_id: str, group_id: str, is_admin: bool = False) -> "Membership":
        return cls(
            id=cls.make_id(user_id, group_id),
            user_id=user_id,
            group_id=group_id,
            is_admin=is_admin,
        )
