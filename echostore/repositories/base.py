"""
Shared plumbing for repositories: argument checks and store error mapping.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from ..core.logging.logger import ContextLogger, get_logger
from ..domain.collections import QUALIFIED_ID_SEPARATOR
from ..domain.exceptions import EchoStoreError, InvalidArgumentError, StoreFailureError
from ..domain.interfaces.document_store import IDocumentStore


def require_non_empty(value: str | None, name: str) -> str:
    """
    Raise InvalidArgumentError unless value is a non-empty string.

    Returns:
        The value, for inline use
    """
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{name} must not be null or empty")
    return value


def require_document_id(value: str | None, name: str) -> str:
    """
    Like require_non_empty, and also reject '/' since ids are path segments.

    Returns:
        The value, for inline use
    """
    require_non_empty(value, name)
    if QUALIFIED_ID_SEPARATOR in value:
        raise InvalidArgumentError(
            f"{name} must not contain '{QUALIFIED_ID_SEPARATOR}': {value!r}"
        )
    return value


class StoreRepository:
    """Base for repositories built on an IDocumentStore."""

    def __init__(self, store: IDocumentStore):
        if store is None:
            raise ValueError("store is required")
        self.store = store
        self.logger: ContextLogger = get_logger(self.__class__.__module__)

    @contextmanager
    def store_errors(self, operation: str) -> Iterator[None]:
        """
        Let domain errors through and wrap anything else the store raises.

        Usage::

            with self.store_errors("get user u1"):
                doc = await self.store.get_document(USERS_COLLECTION, "u1")
        """
        try:
            yield
        except EchoStoreError:
            raise
        except Exception as e:
            self.logger.error(f"Store failure during {operation}: {e}")
            raise StoreFailureError(f"{operation} failed: {e}") from e
