"""
Document store interface.

Defines the only contract a backing store must satisfy for the repositories
to run on it.
"""

from abc import ABC, abstractmethod
from typing import Any


class IDocumentStore(ABC):
    """
    Interface for key-addressed document storage.

    Collections are named by path; a nested collection such as
    "chats/{chatId}/messages" is a separate namespace per parent id.
    Every document returned is a copy owned by the caller.

    Implementations raise NotFoundError where documented below and wrap any
    other backend failure in StoreFailureError.
    """

    @abstractmethod
    async def get_document(self, collection: str, document_id: str) -> dict[str, Any]:
        """
        Get one document.

        Raises:
            NotFoundError: if the document does not exist
        """
        pass

    @abstractmethod
    async def set_document(
        self, collection: str, document_id: str, value: dict[str, Any]
    ) -> None:
        """Create or fully overwrite a document."""
        pass

    @abstractmethod
    async def patch_document(
        self, collection: str, document_id: str, partial: dict[str, Any]
    ) -> None:
        """
        Merge fields into an existing document.

        Fields present in partial overwrite; absent fields are untouched.

        Raises:
            NotFoundError: if the document does not exist
        """
        pass

    @abstractmethod
    async def delete_document(self, collection: str, document_id: str) -> None:
        """
        Delete one document.

        Raises:
            NotFoundError: if the document does not exist
        """
        pass

    @abstractmethod
    async def scan_collection(self, collection: str) -> list[dict[str, Any]]:
        """
        Get every document of a collection.

        Order is backend-defined; repositories apply their own ordering.
        """
        pass

    @abstractmethod
    async def query_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        """Get documents whose field equals value."""
        pass

    @abstractmethod
    async def query_array_contains(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        """Get documents whose list field contains value."""
        pass

    @abstractmethod
    async def delete_collection(self, collection: str) -> int:
        """
        Delete every document under a collection path.

        Returns:
            Number of documents deleted (0 for a missing collection)
        """
        pass

    @abstractmethod
    def new_id(self, collection: str) -> str:
        """Generate a fresh document id for the collection."""
        pass
