"""
Document store collection names and paths (schema-in-code).

The store creates collections on first write, so these constants are the
single source of truth for where each entity lives.
"""

from .exceptions import InvalidArgumentError

USERS_COLLECTION = "users"
CHATS_COLLECTION = "chats"
GROUPS_COLLECTION = "groups"
MEMBERSHIPS_COLLECTION = "memberships"
MESSAGES_SUBCOLLECTION = "messages"

# Field names used in store queries
FIELD_EMAIL = "email"
FIELD_MEMBER_IDS = "memberIds"
FIELD_PARTICIPANT_IDS = "participantIds"
FIELD_GROUP_ID = "groupId"

QUALIFIED_ID_SEPARATOR = "/"


def messages_path(chat_id: str) -> str:
    """Subcollection holding the messages of one chat."""
    return f"{CHATS_COLLECTION}/{chat_id}/{MESSAGES_SUBCOLLECTION}"


def parse_qualified_message_id(qualified_id: str | None) -> tuple[str, str]:
    """
    Split a "{chatId}/{messageId}" identifier.

    Raises:
        InvalidArgumentError: if there is not exactly one separator or either
            half is empty
    """
    if not qualified_id:
        raise InvalidArgumentError("Message id must not be null or empty")
    chat_id, sep, message_id = qualified_id.partition(QUALIFIED_ID_SEPARATOR)
    if (
        not sep
        or not chat_id
        or not message_id
        or QUALIFIED_ID_SEPARATOR in message_id
    ):
        raise InvalidArgumentError(
            f"Invalid message id format '{qualified_id}', expected 'chatId/messageId'"
        )
    return chat_id, message_id
