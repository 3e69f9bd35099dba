"""
Shared base for stored entities.

Documents keep the camelCase field names the mobile client writes
(displayName, chatId, ...); Python code uses snake_case attributes.
"""

import time
from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


class DocumentModel(BaseModel):
    """
    Base model for every entity persisted in the document store.

    validate_assignment keeps model_fields_set current when attributes are
    assigned after construction, which is what to_patch relies on.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        """Full document representation (camelCase keys, JSON-safe values)."""
        return self.model_dump(by_alias=True, mode="json")

    def to_patch(self, *, exclude: set[str] | None = None) -> dict[str, Any]:
        """
        Merge payload containing only explicitly provided, non-None fields.

        Args:
            exclude: Attribute names never written by a patch (e.g. {"id"})
        """
        return self.model_dump(
            by_alias=True,
            mode="json",
            exclude_unset=True,
            exclude_none=True,
            exclude=exclude,
        )

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        """Build the entity from a stored document."""
        return cls.model_validate(document)
