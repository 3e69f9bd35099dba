"""
Document store factory for echostore.

Builds the configured IDocumentStore backend.
"""

from ..core.config.settings import settings
from ..domain.interfaces.document_store import IDocumentStore


def create_document_store(backend: str, **options) -> IDocumentStore:
    """
    Create a document store for the given backend.

    Args:
        backend: Type of store to create ("memory", "json", "redis")
        **options: Backend options
            json: root (directory for collection files)
            redis: url, max_connections, key_prefix

    Returns:
        Document store instance

    Raises:
        ValueError: If backend is not supported or misconfigured
        ImportError: If required dependencies are not available
    """
    if backend == "memory":
        from .memory import MemoryDocumentStore

        return MemoryDocumentStore()

    elif backend == "json":
        from .json import JsonDocumentStore

        return JsonDocumentStore(options.get("root", settings.json_store_dir))

    elif backend == "redis":
        try:
            from .redis import KeyFactory, RedisClient, RedisDocumentStore
        except ImportError as e:
            raise ImportError(
                f"Redis dependencies not available for backend='redis': {e}"
            ) from e

        url = options.get("url", settings.redis_url)
        if not url:
            raise ValueError(
                "Redis URL not configured. Set REDIS_URL environment variable "
                "or use a different backend"
            )
        RedisClient.setup(
            url,
            max_connections=options.get(
                "max_connections", settings.redis_max_connections
            ),
        )
        keys = KeyFactory(prefix=options.get("key_prefix", settings.redis_key_prefix))
        return RedisDocumentStore(keys=keys)

    else:
        raise ValueError(
            f"Unsupported store backend: {backend}. "
            f"Supported backends: 'memory', 'json', 'redis'"
        )


def get_document_store() -> IDocumentStore:
    """Create the document store selected by STORE_BACKEND."""
    return create_document_store(settings.store_backend)
