"""
Chat repository over the document store.

Chats live in the "chats" collection; their messages are a subcollection
handled by MessageRepository.
"""

from ..domain.collections import CHATS_COLLECTION, FIELD_PARTICIPANT_IDS
from ..domain.exceptions import InvalidArgumentError, NotFoundError
from ..domain.interfaces.chat_repository import IChatRepository
from ..domain.models import Chat, Message, now_ms
from .base import StoreRepository, require_document_id, require_non_empty


def preview_text(message: Message) -> str:
    """Text shown in the chat list for a message."""
    if message.content:
        return message.content
    if message.has_media:
        return f"[{message.message_type.value}]"
    return ""


class ChatRepository(StoreRepository, IChatRepository):
    """Chat metadata and last-message preview."""

    async def get_by_id(self, chat_id: str) -> Chat:
        require_document_id(chat_id, "chat_id")
        with self.store_errors(f"get chat {chat_id}"):
            document = await self.store.get_document(CHATS_COLLECTION, chat_id)
        return Chat.from_document(document)

    async def get_for_user(self, user_id: str) -> list[Chat]:
        require_non_empty(user_id, "user_id")
        with self.store_errors(f"query chats of {user_id}"):
            documents = await self.store.query_array_contains(
                CHATS_COLLECTION, FIELD_PARTICIPANT_IDS, user_id
            )
        chats = [Chat.from_document(doc) for doc in documents]
        return sorted(chats, key=lambda c: c.last_message_timestamp, reverse=True)

    async def create(self, chat: Chat) -> Chat:
        if chat is None:
            raise InvalidArgumentError("Chat must not be null")
        if chat.id is not None:
            require_document_id(chat.id, "chat.id")
        participants = list(dict.fromkeys(chat.participant_ids))
        if any(not p for p in participants):
            raise InvalidArgumentError("participant ids must not be empty")
        if not chat.is_group and len(participants) < 2:
            raise InvalidArgumentError("A private chat needs at least 2 participants")

        stored = chat.model_copy(deep=True)
        stored.participant_ids = participants
        if not stored.id:
            stored.id = self.store.new_id(CHATS_COLLECTION)

        with self.store_errors(f"create chat {stored.id}"):
            await self.store.set_document(CHATS_COLLECTION, stored.id, stored.to_document())
        self.logger.info(f"Chat created: {stored.id} (group={stored.is_group})")
        return stored

    async def update_preview(self, chat_id: str, message: Message) -> bool:
        """
        Point the chat preview at message unless the chat already shows a
        newer one.

        Returns:
            True if the preview changed

        Raises:
            NotFoundError: if the chat does not exist
        """
        require_document_id(chat_id, "chat_id")
        if message is None:
            raise InvalidArgumentError("Message must not be null")
        require_non_empty(message.id, "message.id")

        chat = await self.get_by_id(chat_id)
        if chat.last_message_id and message.timestamp < chat.last_message_timestamp:
            self.logger.debug(
                f"Chat {chat_id} already previews a newer message, skipping {message.id}"
            )
            return False

        patch = {
            "lastMessageId": message.id,
            "lastMessageText": preview_text(message),
            "lastMessageTimestamp": message.timestamp,
            "updatedAt": now_ms(),
        }
        with self.store_errors(f"update preview of chat {chat_id}"):
            await self.store.patch_document(CHATS_COLLECTION, chat_id, patch)
        return True

    async def delete(self, chat_id: str) -> None:
        require_document_id(chat_id, "chat_id")
        with self.store_errors(f"delete chat {chat_id}"):
            await self.store.delete_document(CHATS_COLLECTION, chat_id)
        self.logger.info(f"Chat deleted: {chat_id}")

    async def exists(self, chat_id: str) -> bool:
        try:
            await self.get_by_id(chat_id)
        except NotFoundError:
            return False
        return True
