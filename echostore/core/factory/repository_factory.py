"""
Explicit wiring of repositories and services over one document store.
"""

from dataclasses import dataclass

from ...domain.interfaces.document_store import IDocumentStore
from ...persistence.store_factory import get_document_store
from ...repositories import (
    ChatRepository,
    GroupRepository,
    MessageRepository,
    UserRepository,
)
from ...services.conversation_service import ConversationService
from ..logging.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RepositoryBundle:
    """All repositories sharing a single store."""

    store: IDocumentStore
    users: UserRepository
    messages: MessageRepository
    chats: ChatRepository
    groups: GroupRepository
    conversations: ConversationService


def create_repositories(store: IDocumentStore | None = None) -> RepositoryBundle:
    """
    Build every repository over the given store.

    Args:
        store: Document store to use; the STORE_BACKEND store when omitted

    Returns:
        RepositoryBundle wired to one store instance
    """
    if store is None:
        store = get_document_store()
    logger.debug(f"Wiring repositories over {store.__class__.__name__}")

    messages = MessageRepository(store)
    chats = ChatRepository(store)
    return RepositoryBundle(
        store=store,
        users=UserRepository(store),
        messages=messages,
        chats=chats,
        groups=GroupRepository(store),
        conversations=ConversationService(messages, chats),
    )
