"""
File system operations for the JSON document store.

Handles collection file paths, locked reads and atomic writes.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from ...domain.exceptions import StoreFailureError

logger = logging.getLogger("JSONFileManager")

FILE_FORMAT_VERSION = "1.0"


def to_json_string(data: Any) -> str:
    """Convert data to JSON string."""
    return json.dumps(data, ensure_ascii=False, indent=2)


def from_json_string(json_str: str) -> Any:
    """Convert JSON string to data."""
    return json.loads(json_str)


class KeyedLocks:
    """
    asyncio locks created on demand per key.

    An entry lives only while some task holds or waits for it, so the
    registry stays bounded by in-flight operations rather than by the
    number of collections ever touched.
    """

    def __init__(self):
        self._entries: dict[str, list] = {}  # key -> [lock, users]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = [asyncio.Lock(), 0]
        entry[1] += 1
        try:
            async with entry[0]:
                yield
        finally:
            entry[1] -= 1
            if entry[1] == 0:
                del self._entries[key]


class FileManager:
    """Manages one JSON file per collection path under a root directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self._file_locks = KeyedLocks()

    def collection_file(self, collection: str) -> Path:
        """
        Map a collection path to its file.

        "users" -> {root}/users.json
        "chats/c1/messages" -> {root}/chats/c1/messages.json
        """
        parts = [p for p in collection.split("/") if p]
        if not parts or any(p in (".", "..") for p in parts):
            raise StoreFailureError(f"Invalid collection path: {collection!r}")
        return self.root.joinpath(*parts[:-1], f"{parts[-1]}.json")

    async def read_documents(self, file_path: Path) -> dict[str, dict[str, Any]]:
        """Read the documents of a collection file ({} if the file is missing)."""
        async with self._file_locks.hold(str(file_path)):
            if not file_path.exists():
                return {}
            try:
                content = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
                file_data = from_json_string(content)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Failed to read file {file_path}: {e}")
                raise StoreFailureError(f"Failed to read {file_path}: {e}") from e
        return file_data.get("documents", {})

    async def write_documents(
        self, file_path: Path, documents: dict[str, dict[str, Any]]
    ) -> None:
        """Write the documents of a collection file atomically."""
        file_data = {
            "_metadata": {
                "updated_at": datetime.now().isoformat(),
                "version": FILE_FORMAT_VERSION,
            },
            "documents": documents,
        }
        async with self._file_locks.hold(str(file_path)):
            try:
                file_path.parent.mkdir(parents=True, exist_ok=True)

                # Write to temporary file first, then rename (atomic operation)
                temp_file = file_path.with_suffix(file_path.suffix + ".tmp")
                content = to_json_string(file_data)

                await asyncio.to_thread(temp_file.write_text, content, encoding="utf-8")
                await asyncio.to_thread(temp_file.replace, file_path)
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Failed to write file {file_path}: {e}")
                raise StoreFailureError(f"Failed to write {file_path}: {e}") from e

    async def delete_file(self, file_path: Path) -> None:
        """Delete a collection file if it exists."""
        async with self._file_locks.hold(str(file_path)):
            try:
                if file_path.exists():
                    await asyncio.to_thread(file_path.unlink)
            except OSError as e:
                logger.error(f"Failed to delete file {file_path}: {e}")
                raise StoreFailureError(f"Failed to delete {file_path}: {e}") from e
