"""
Repository wiring.

Repositories take their document store explicitly; this package builds a
matching set of them from one store.
"""

from .repository_factory import RepositoryBundle, create_repositories

__all__ = ["RepositoryBundle", "create_repositories"]
