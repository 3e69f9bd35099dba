"""
Chat repository interface.

Defines contract for chat metadata and the last-message preview.
"""

from abc import ABC, abstractmethod

from ..models import Chat, Message


class IChatRepository(ABC):
    """Interface for chat persistence."""

    @abstractmethod
    async def get_by_id(self, chat_id: str) -> Chat:
        pass

    @abstractmethod
    async def get_for_user(self, user_id: str) -> list[Chat]:
        """Chats the user participates in, most recent activity first."""
        pass

    @abstractmethod
    async def create(self, chat: Chat) -> Chat:
        pass

    @abstractmethod
    async def update_preview(self, chat_id: str, message: Message) -> bool:
        """Point the chat preview at message unless a newer one is shown."""
        pass

    @abstractmethod
    async def delete(self, chat_id: str) -> None:
        pass

    @abstractmethod
    async def exists(self, chat_id: str) -> bool:
        pass
