"""
Chat entity.

A chat is either private (two participants) or the conversation attached to
a group, in which case it shares the group's id. The lastMessage* fields are
a denormalized preview refreshed after each send.
"""

from pydantic import Field

from .base import DocumentModel, now_ms


class Chat(DocumentModel):
    """Conversation metadata shown in the chat list."""

    id: str | None = None
    participant_ids: list[str] = Field(default_factory=list)
    last_message_id: str | None = None
    last_message_text: str | None = None
    last_message_timestamp: int = 0
    is_group: bool = False
    updated_at: int = Field(default_factory=now_ms)

    def has_participant(self, user_id: str) -> bool:
        return user_id in self.participant_ids
