"""
Message repository interface.

Defines contract for append-only message storage scoped to a chat.
"""

from abc import ABC, abstractmethod

from ..enums import DeliveryStatus
from ..models import Message


class IMessageRepository(ABC):
    """
    Interface for chat message persistence.

    Messages outside their chat are addressed by the qualified id
    "{chatId}/{messageId}".
    """

    @abstractmethod
    async def get_by_chat_id(self, chat_id: str) -> list[Message]:
        """
        Get the messages of a chat, ascending by timestamp.

        Messages sharing a timestamp keep their insertion order.
        """
        pass

    @abstractmethod
    async def send(self, message: Message) -> Message:
        """
        Append a message to its chat.

        Returns:
            The stored message, with id and delivery status filled in
        """
        pass

    @abstractmethod
    async def update_status(
        self, qualified_id: str, status: DeliveryStatus | str
    ) -> None:
        """Overwrite the delivery status of a message."""
        pass

    @abstractmethod
    async def delete(self, qualified_id: str) -> None:
        """Delete a single message."""
        pass
