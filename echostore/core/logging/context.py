"""
Operation context management using contextvars for automatic propagation.

The conversation layer sets the acting user and chat once per operation and
every logger obtained through get_logger picks them up without manual
parameter passing.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_user_context: ContextVar[str | None] = ContextVar("user_id", default=None)
_chat_context: ContextVar[str | None] = ContextVar("chat_id", default=None)


def set_operation_context(
    user_id: str | None = None,
    chat_id: str | None = None,
) -> None:
    """
    Set the operation context for the current async context.

    Args:
        user_id: Acting user identifier
        chat_id: Chat the operation targets
    """
    if user_id is not None:
        _user_context.set(user_id)
    if chat_id is not None:
        _chat_context.set(chat_id)


def get_current_user_context() -> str | None:
    """Get the current user ID from context variables."""
    return _user_context.get()


def get_current_chat_context() -> str | None:
    """Get the current chat ID from context variables."""
    return _chat_context.get()


def clear_operation_context() -> None:
    """Reset both context variables for the current async context."""
    _user_context.set(None)
    _chat_context.set(None)


@contextmanager
def operation_context(
    user_id: str | None = None,
    chat_id: str | None = None,
) -> Iterator[None]:
    """
    Scope the operation context to a block.

    Both variables are set, None included, and restored to their previous
    values on exit so nothing leaks into later operations of the same task.

    Usage::

        with operation_context(user_id=message.sender_id, chat_id=message.chat_id):
            await repo.send(message)
    """
    user_token = _user_context.set(user_id)
    chat_token = _chat_context.set(chat_id)
    try:
        yield
    finally:
        _chat_context.reset(chat_token)
        _user_context.reset(user_token)
