"""
echostore - async data-access layer for a chat application

Repositories for users, messages, chats and groups over a pluggable
document store, with an in-memory reference store for tests.

Usage:
    from echostore import create_repositories
    from echostore.persistence import MemoryDocumentStore

    repos = create_repositories(MemoryDocumentStore())
    await repos.users.add(user)
"""

from .core.config.settings import settings
from .core.factory import RepositoryBundle, create_repositories
from .domain.exceptions import (
    CascadeError,
    EchoStoreError,
    InvalidArgumentError,
    LastAdminError,
    NotFoundError,
    StoreFailureError,
)

__version__ = settings.version

__all__ = [
    "RepositoryBundle",
    "create_repositories",
    "EchoStoreError",
    "InvalidArgumentError",
    "LastAdminError",
    "NotFoundError",
    "StoreFailureError",
    "CascadeError",
]
