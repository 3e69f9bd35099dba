"""
Services composing several repositories.
"""

from .cascade import Cascade, delete_if_exists
from .conversation_service import ConversationService, private_chat_id

__all__ = [
    "Cascade",
    "delete_if_exists",
    "ConversationService",
    "private_chat_id",
]
