"""
User entity.

Stored in the "users" collection; the document key is the user id, which
matches the auth provider's subject.
"""

from pydantic import Field

from .base import DocumentModel, now_ms


class User(DocumentModel):
    """A registered chat user and their presence."""

    id: str | None = Field(None, description="Stable identifier, the document key")
    display_name: str | None = Field(None, description="Name shown to other users")
    email: str | None = Field(
        None, description="Login email, compared case-sensitively"
    )
    profile_image_url: str | None = None
    is_online: bool = False
    last_seen: int = Field(0, description="Epoch ms of the last presence update")
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)
