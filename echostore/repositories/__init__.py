"""
Repository implementations over IDocumentStore.
"""

from .base import StoreRepository
from .chat_repository import ChatRepository
from .group_repository import GroupRepository
from .message_repository import MessageRepository
from .user_repository import UserRepository

__all__ = [
    "StoreRepository",
    "UserRepository",
    "MessageRepository",
    "ChatRepository",
    "GroupRepository",
]
