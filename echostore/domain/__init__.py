"""
echostore domain layer

Entities, enums, error taxonomy and the interfaces the persistence and
repository layers implement.
"""

from .enums import DeliveryStatus, MessageType
from .exceptions import (
    CascadeError,
    EchoStoreError,
    InvalidArgumentError,
    LastAdminError,
    NotFoundError,
    StoreFailureError,
)
from .models import Chat, Group, Membership, Message, User

__all__ = [
    "CascadeError",
    "Chat",
    "DeliveryStatus",
    "EchoStoreError",
    "Group",
    "InvalidArgumentError",
    "LastAdminError",
    "Membership",
    "Message",
    "MessageType",
    "NotFoundError",
    "StoreFailureError",
    "User",
]
