from .message_enums import DeliveryStatus, MessageType

__all__ = ["DeliveryStatus", "MessageType"]
