"""
Message entity.

Messages live in the per-chat subcollection chats/{chatId}/messages and are
addressed from outside by the qualified id "{chatId}/{messageId}".
"""

from pydantic import Field

from ..enums import DeliveryStatus, MessageType
from .base import DocumentModel, now_ms


class Message(DocumentModel):
    """A single chat message. Content is immutable once sent."""

    id: str | None = None
    sender_id: str | None = None
    receiver_id: str | None = Field(None, description="Recipient, private chats only")
    chat_id: str | None = Field(None, description="Owning chat, required on send")
    content: str | None = None
    media_url: str | None = Field(None, description="Set iff message_type is media")
    message_type: MessageType = MessageType.TEXT
    delivery_status: DeliveryStatus | None = None
    timestamp: int = Field(default_factory=now_ms)

    @property
    def has_media(self) -> bool:
        return self.message_type.is_media

    @property
    def qualified_id(self) -> str:
        """Storage path of the message, "{chatId}/{messageId}"."""
        return f"{self.chat_id}/{self.id}"
