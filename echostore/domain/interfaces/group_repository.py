"""
Group repository interface.

Defines contract for groups, their membership and the linked group chat.
"""

from abc import ABC, abstractmethod

from ..models import Group


class IGroupRepository(ABC):
    """
    Interface for group persistence.

    Implementations own the consistency between a group, its membership
    records and the chat that shares its id.
    """

    @abstractmethod
    async def get_by_id(self, group_id: str) -> Group:
        pass

    @abstractmethod
    async def get_for_user(self, user_id: str) -> list[Group]:
        """Groups whose memberIds contain user_id."""
        pass

    @abstractmethod
    async def create(self, group: Group) -> Group:
        """Create the group together with its chat and membership records."""
        pass

    @abstractmethod
    async def update(self, group: Group) -> None:
        """Merge the explicitly provided fields of group."""
        pass

    @abstractmethod
    async def delete(self, group_id: str) -> None:
        """Delete messages, chat, memberships and finally the group."""
        pass

    @abstractmethod
    async def add_member(self, group_id: str, user_id: str, is_admin: bool = False) -> None:
        pass

    @abstractmethod
    async def remove_member(self, group_id: str, user_id: str) -> None:
        """
        Remove a member.

        Raises:
            LastAdminError: if user_id is the group's only admin
        """
        pass
