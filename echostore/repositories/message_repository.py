"""
Message repository over the document store.

Messages are stored in the chats/{chatId}/messages subcollection. This
repository never touches the parent chat document; refreshing the chat
preview after a send is the conversation service's job.
"""

from ..domain.collections import messages_path, parse_qualified_message_id
from ..domain.enums import DeliveryStatus
from ..domain.exceptions import InvalidArgumentError, NotFoundError
from ..domain.interfaces.message_repository import IMessageRepository
from ..domain.models import Message
from .base import StoreRepository, require_document_id


class MessageRepository(StoreRepository, IMessageRepository):
    """Append-only message storage with timestamp ordering."""

    @staticmethod
    def _coerce_status(status: DeliveryStatus | str | None) -> DeliveryStatus:
        if status is None:
            raise InvalidArgumentError("status must not be null")
        try:
            return DeliveryStatus(status)
        except ValueError as e:
            allowed = [s.value for s in DeliveryStatus]
            raise InvalidArgumentError(
                f"Unknown delivery status {status!r}, expected one of {allowed}"
            ) from e

    @staticmethod
    def _validate_outgoing(message: Message | None) -> Message:
        if message is None:
            raise InvalidArgumentError("Message must not be null")
        require_document_id(message.chat_id, "message.chat_id")
        if message.id is not None:
            require_document_id(message.id, "message.id")
        if message.has_media and not message.media_url:
            raise InvalidArgumentError(
                f"{message.message_type.value} message requires media_url"
            )
        if not message.has_media and message.media_url:
            raise InvalidArgumentError("text message must not carry media_url")
        return message

    async def get_by_chat_id(self, chat_id: str) -> list[Message]:
        require_document_id(chat_id, "chat_id")
        self.logger.debug(f"Fetching messages for chat: {chat_id}")

        with self.store_errors(f"scan messages of {chat_id}"):
            documents = await self.store.scan_collection(messages_path(chat_id))

        # sorted() is stable: equal timestamps keep store order
        messages = sorted(
            (Message.from_document(doc) for doc in documents),
            key=lambda m: m.timestamp,
        )
        self.logger.debug(f"Fetched {len(messages)} messages for chat: {chat_id}")
        return messages

    async def send(self, message: Message) -> Message:
        self._validate_outgoing(message)
        stored = message.model_copy(deep=True)
        collection = messages_path(stored.chat_id)

        if stored.delivery_status is None:
            stored.delivery_status = DeliveryStatus.SENT
        if not stored.id:
            stored.id = self.store.new_id(collection)

        with self.store_errors(f"send message {stored.qualified_id}"):
            await self.store.set_document(collection, stored.id, stored.to_document())
        self.logger.info(f"Message sent: {stored.qualified_id}")
        return stored

    async def update_status(
        self, qualified_id: str, status: DeliveryStatus | str
    ) -> None:
        chat_id, message_id = parse_qualified_message_id(qualified_id)
        new_status = self._coerce_status(status)
        # Any status may overwrite any other; forward-only is not enforced here
        self.logger.debug(f"Updating message {qualified_id} status -> {new_status.value}")

        try:
            with self.store_errors(f"update status of {qualified_id}"):
                await self.store.patch_document(
                    messages_path(chat_id),
                    message_id,
                    {"deliveryStatus": new_status.value},
                )
        except NotFoundError:
            self.logger.error(f"Cannot update status of missing message: {qualified_id}")
            raise

    async def delete(self, qualified_id: str) -> None:
        chat_id, message_id = parse_qualified_message_id(qualified_id)
        self.logger.debug(f"Deleting message: {qualified_id}")

        with self.store_errors(f"delete message {qualified_id}"):
            await self.store.delete_document(messages_path(chat_id), message_id)
        self.logger.info(f"Message deleted: {qualified_id}")
