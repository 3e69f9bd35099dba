"""Entity models persisted by the repositories."""

from .base import DocumentModel, now_ms
from .chat import Chat
from .group import Group
from .membership import Membership
from .message import Message
from .user import User

__all__ = [
    "Chat",
    "DocumentModel",
    "Group",
    "Membership",
    "Message",
    "User",
    "now_ms",
]
