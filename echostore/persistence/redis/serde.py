"""
Document <-> Redis hash serialization.

Each document field is stored as one hash field holding its JSON encoding,
so a patch is a plain HSET of the changed fields.
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger("RedisSerde")


def dumps(value: Any) -> str:
    """Serialize one field value to its stored string."""
    return json.dumps(value, ensure_ascii=False)


def loads(raw: str | None) -> Any:
    """Deserialize one stored field value."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        # Written by something other than this store; hand back as-is
        logger.warning(f"Non-JSON hash field value, returning raw string: {raw!r}")
        return raw


def dumps_hash(document: dict[str, Any]) -> dict[str, str]:
    """Serialize a document for Redis hash storage."""
    return {field: dumps(value) for field, value in document.items()}


def loads_hash(raw_data: dict[str, str] | None) -> dict[str, Any]:
    """Deserialize a Redis hash back into a document."""
    if not raw_data:
        return {}
    return {field: loads(value) for field, value in raw_data.items()}
