"""Domain interfaces: the store capability contract and repository contracts."""

from .chat_repository import IChatRepository
from .document_store import IDocumentStore
from .group_repository import IGroupRepository
from .message_repository import IMessageRepository
from .user_repository import IUserRepository

__all__ = [
    "IChatRepository",
    "IDocumentStore",
    "IGroupRepository",
    "IMessageRepository",
    "IUserRepository",
]
