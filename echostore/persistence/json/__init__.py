"""
JSON file-based document store for echostore.

Usage:
    store = JsonDocumentStore("./data")
"""

from .json_store import JsonDocumentStore

__all__ = ["JsonDocumentStore"]
