"""
Group entity.

A group is linked to the Chat with the same id. adminId must always be one
of memberIds.
"""

from pydantic import Field

from .base import DocumentModel, now_ms


class Group(DocumentModel):
    """A named group of users with one primary admin."""

    id: str | None = Field(None, description="Equal to the linked chat id")
    name: str | None = None
    description: str | None = None
    admin_id: str | None = Field(None, description="Primary admin, always a member")
    member_ids: list[str] = Field(default_factory=list)
    group_image_url: str | None = None
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)

    def is_member(self, user_id: str) -> bool:
        return user_id in self.member_ids

    def is_admin(self, user_id: str) -> bool:
        return user_id == self.admin_id
