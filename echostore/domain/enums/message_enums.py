"""
Message enums shared by the entity model and the message repository.
"""

from enum import Enum


class MessageType(str, Enum):
    """Kind of content a message carries."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"

    @property
    def is_media(self) -> bool:
        """Media messages carry a mediaUrl."""
        return self is not MessageType.TEXT


class DeliveryStatus(str, Enum):
    """
    Delivery progression of a message: sent -> delivered -> seen.

    The repository does not enforce forward-only writes; is_forward_of is
    provided for callers that want to.
    """

    SENT = "sent"
    DELIVERED = "delivered"
    SEEN = "seen"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]

    def is_forward_of(self, other: "DeliveryStatus") -> bool:
        """True when moving from other to self keeps or advances the status."""
        return self.rank >= other.rank


_STATUS_RANK = {
    DeliveryStatus.SENT: 0,
    DeliveryStatus.DELIVERED: 1,
    DeliveryStatus.SEEN: 2,
}
