from __future__ import annotations

from pydantic import BaseModel, Field


class KeyFactory(BaseModel):
    """Pure stateless helpers for document store key generation."""

    prefix: str = Field(default="echo")
    doc_marker: str = Field(default="doc")
    index_marker: str = Field(default="idx")
    sequence_marker: str = Field(default="seq")

    # ---- builders ---------------------------------------------------------
    def document(self, collection: str, document_id: str) -> str:
        return f"{self.prefix}:{self.doc_marker}:{collection}:{document_id}"

    def index(self, collection: str) -> str:
        """Sorted set of document ids scored by insertion sequence."""
        return f"{self.prefix}:{self.index_marker}:{collection}"

    def sequence(self) -> str:
        return f"{self.prefix}:{self.sequence_marker}"


# Default instance for global use
default_key_factory = KeyFactory()
