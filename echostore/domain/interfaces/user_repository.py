"""
User repository interface.

Defines contract for CRUD and email lookup over User entities.
"""

from abc import ABC, abstractmethod

from ..models import User


class IUserRepository(ABC):
    """Interface for user persistence."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User:
        """
        Get a user by id.

        Raises:
            InvalidArgumentError: if user_id is empty
            NotFoundError: if no such user exists
        """
        pass

    @abstractmethod
    async def get_all(self) -> list[User]:
        """Get every user."""
        pass

    @abstractmethod
    async def add(self, user: User) -> None:
        """Create or fully overwrite a user (last write wins)."""
        pass

    @abstractmethod
    async def update(self, user: User) -> None:
        """
        Merge the explicitly provided fields of user into the stored user.

        Raises:
            NotFoundError: if the user does not exist
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Delete a user. Chats and groups are not touched."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> User:
        """
        Get the user with this exact (case-sensitive) email.

        Raises:
            NotFoundError: if no user has this email
        """
        pass
