"""
Conversation service - message sends with their chat-list side effect.

MessageRepository only writes the message; this service also refreshes the
parent chat's preview so the chat list shows the latest message.
"""

from ..core.logging.context import operation_context
from ..core.logging.logger import get_logger
from ..domain.exceptions import InvalidArgumentError
from ..domain.interfaces.chat_repository import IChatRepository
from ..domain.interfaces.message_repository import IMessageRepository
from ..domain.models import Chat, Message


def private_chat_id(user_a: str, user_b: str) -> str:
    """Deterministic id of the private chat between two users."""
    first, second = sorted((user_a, user_b))
    return f"private_{first}_{second}"


class ConversationService:
    """Composes the message and chat repositories."""

    def __init__(self, messages: IMessageRepository, chats: IChatRepository):
        self.messages = messages
        self.chats = chats
        self.logger = get_logger(__name__)

    async def send_message(self, message: Message) -> Message:
        """
        Store a message and refresh the chat preview.

        The chat must exist; it is looked up before the message is written
        so an unknown chat leaves no orphan message behind.

        Returns:
            The stored message with id and delivery status assigned

        Raises:
            InvalidArgumentError: for an invalid message
            NotFoundError: if the chat does not exist
        """
        if message is None:
            raise InvalidArgumentError("Message must not be null")
        with operation_context(user_id=message.sender_id, chat_id=message.chat_id):
            if message.chat_id:
                await self.chats.get_by_id(message.chat_id)
            stored = await self.messages.send(message)
            updated = await self.chats.update_preview(stored.chat_id, stored)
            if not updated:
                self.logger.debug(f"Preview of {stored.chat_id} kept, newer message shown")
        return stored

    async def open_private_chat(self, user_a: str, user_b: str) -> Chat:
        """
        Return the private chat between two users, creating it if needed.

        The id does not depend on argument order.
        """
        if not user_a or not user_b:
            raise InvalidArgumentError("user ids must not be null or empty")
        if user_a == user_b:
            raise InvalidArgumentError("A private chat needs two different users")

        chat_id = private_chat_id(user_a, user_b)
        if await self.chats.exists(chat_id):
            return await self.chats.get_by_id(chat_id)

        self.logger.info(f"Opening private chat {chat_id}")
        return await self.chats.create(
            Chat(id=chat_id, participant_ids=sorted((user_a, user_b)), is_group=False)
        )
