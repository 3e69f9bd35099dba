"""
Group repository over the document store.

A group owns three kinds of documents besides itself:

- the chat with the same id (isGroup = true), whose participantIds mirror
  the group's memberIds
- the chat's message subcollection
- one membership record per member ("{userId}_{groupId}")

Multi-document writes go through Cascade and are not atomic. Every step is
safe to re-run, so a caller that gets a CascadeError can retry the whole
operation.
"""

from ..domain.collections import (
    CHATS_COLLECTION,
    FIELD_GROUP_ID,
    FIELD_MEMBER_IDS,
    GROUPS_COLLECTION,
    MEMBERSHIPS_COLLECTION,
    messages_path,
)
from ..domain.exceptions import InvalidArgumentError, LastAdminError, NotFoundError
from ..domain.interfaces.group_repository import IGroupRepository
from ..domain.models import Chat, Group, Membership, now_ms
from ..services.cascade import Cascade, delete_if_exists
from .base import StoreRepository, require_document_id, require_non_empty


class GroupRepository(StoreRepository, IGroupRepository):
    """Groups, their membership records and the linked group chat."""

    # ---- Reads -------------------------------------------------------------

    async def get_by_id(self, group_id: str) -> Group:
        require_document_id(group_id, "group_id")
        with self.store_errors(f"get group {group_id}"):
            document = await self.store.get_document(GROUPS_COLLECTION, group_id)
        return Group.from_document(document)

    async def get_for_user(self, user_id: str) -> list[Group]:
        require_non_empty(user_id, "user_id")
        with self.store_errors(f"query groups of {user_id}"):
            documents = await self.store.query_array_contains(
                GROUPS_COLLECTION, FIELD_MEMBER_IDS, user_id
            )
        return [Group.from_document(doc) for doc in documents]

    async def get_memberships(self, group_id: str) -> list[Membership]:
        """Membership records of a group, in store order."""
        require_document_id(group_id, "group_id")
        with self.store_errors(f"query memberships of {group_id}"):
            documents = await self.store.query_by_field(
                MEMBERSHIPS_COLLECTION, FIELD_GROUP_ID, group_id
            )
        return [Membership.from_document(doc) for doc in documents]

    async def _admin_ids(self, group: Group) -> list[str]:
        """Current members holding admin rights, in member order."""
        flagged = {m.user_id for m in await self.get_memberships(group.id) if m.is_admin}
        flagged.add(group.admin_id)
        return [member for member in group.member_ids if member in flagged]

    # ---- Linked chat helpers (idempotent) --------------------------------

    async def _sync_chat_participants(self, group_id: str, member_ids: list[str]) -> None:
        """Create the group chat or align its participants with member_ids."""
        try:
            await self.store.get_document(CHATS_COLLECTION, group_id)
        except NotFoundError:
            chat = Chat(id=group_id, participant_ids=list(member_ids), is_group=True)
            await self.store.set_document(CHATS_COLLECTION, group_id, chat.to_document())
            return
        await self.store.patch_document(
            CHATS_COLLECTION,
            group_id,
            {"participantIds": list(member_ids), "isGroup": True, "updatedAt": now_ms()},
        )

    async def _write_membership(self, membership: Membership) -> None:
        await self.store.set_document(
            MEMBERSHIPS_COLLECTION, membership.id, membership.to_document()
        )

    async def _flag_admin(self, user_id: str, group_id: str) -> None:
        """Set isAdmin on a membership, writing the record if it is missing."""
        membership_id = Membership.make_id(user_id, group_id)
        try:
            await self.store.patch_document(
                MEMBERSHIPS_COLLECTION, membership_id, {"isAdmin": True}
            )
        except NotFoundError:
            await self._write_membership(
                Membership.for_member(user_id, group_id, is_admin=True)
            )

    # ---- Writes ------------------------------------------------------------

    async def create(self, group: Group) -> Group:
        if group is None:
            raise InvalidArgumentError("Group must not be null")
        if not group.name or not group.name.strip():
            raise InvalidArgumentError("group.name must not be null or empty")
        require_document_id(group.admin_id, "group.admin_id")
        if group.id is not None:
            require_document_id(group.id, "group.id")
        for member in group.member_ids:
            require_document_id(member, "member id")

        stored = group.model_copy(deep=True)
        members = list(dict.fromkeys(stored.member_ids))
        if stored.admin_id not in members:
            members.append(stored.admin_id)
        stored.member_ids = members
        if not stored.id:
            stored.id = self.store.new_id(GROUPS_COLLECTION)
        timestamp = now_ms()
        stored.created_at = timestamp
        stored.updated_at = timestamp

        memberships = [
            Membership.for_member(member, stored.id, is_admin=member == stored.admin_id)
            for member in members
        ]

        async def write_memberships():
            for membership in memberships:
                await self._write_membership(membership)

        cascade = (
            Cascade(f"create group {stored.id}")
            .step(
                "write group",
                lambda: self.store.set_document(
                    GROUPS_COLLECTION, stored.id, stored.to_document()
                ),
            )
            .step(
                "link chat",
                lambda: self._sync_chat_participants(stored.id, members),
            )
            .step("write memberships", write_memberships)
        )
        with self.store_errors(f"create group {stored.id}"):
            await cascade.run()

        self.logger.info(f"Group created: {stored.id} ({len(members)} members)")
        return stored

    async def update(self, group: Group) -> None:
        if group is None:
            raise InvalidArgumentError("Group must not be null")
        require_document_id(group.id, "group.id")
        provided = group.model_fields_set
        if "member_ids" in provided:
            raise InvalidArgumentError(
                "member_ids cannot be updated directly; use add_member/remove_member"
            )
        if "name" in provided and (not group.name or not group.name.strip()):
            raise InvalidArgumentError("group.name must not be empty")

        patch = group.to_patch(exclude={"id", "created_at", "member_ids"})
        patch.setdefault("updatedAt", now_ms())

        if "admin_id" not in provided or group.admin_id is None:
            with self.store_errors(f"update group {group.id}"):
                await self.store.patch_document(GROUPS_COLLECTION, group.id, patch)
            self.logger.info(f"Group updated: {group.id}")
            return

        current = await self.get_by_id(group.id)
        if not current.is_member(group.admin_id):
            raise InvalidArgumentError(
                f"New admin '{group.admin_id}' is not a member of group '{group.id}'"
            )

        cascade = (
            Cascade(f"update group {group.id}")
            .step(
                "patch group",
                lambda: self.store.patch_document(GROUPS_COLLECTION, group.id, patch),
            )
            .step(
                "flag admin membership",
                lambda: self._flag_admin(group.admin_id, group.id),
            )
        )
        with self.store_errors(f"update group {group.id}"):
            await cascade.run()
        self.logger.info(f"Group updated: {group.id} (admin -> {group.admin_id})")

    async def delete(self, group_id: str) -> None:
        """
        Delete a group and everything linked to it.

        Order: messages, chat, memberships, group. A failure partway leaves
        at most a group record without its chat, which a retry cleans up.
        """
        group = await self.get_by_id(group_id)
        membership_ids = {m.id for m in await self.get_memberships(group_id)}
        membership_ids.update(
            Membership.make_id(member, group_id) for member in group.member_ids
        )

        async def delete_memberships():
            for membership_id in sorted(membership_ids):
                await delete_if_exists(self.store, MEMBERSHIPS_COLLECTION, membership_id)

        cascade = (
            Cascade(f"delete group {group_id}")
            .step(
                "delete messages",
                lambda: self.store.delete_collection(messages_path(group_id)),
            )
            .step(
                "delete chat",
                lambda: delete_if_exists(self.store, CHATS_COLLECTION, group_id),
            )
            .step("delete memberships", delete_memberships)
            .step(
                "delete group",
                lambda: delete_if_exists(self.store, GROUPS_COLLECTION, group_id),
            )
        )
        with self.store_errors(f"delete group {group_id}"):
            await cascade.run()
        self.logger.info(f"Group deleted: {group_id}")

    async def add_member(self, group_id: str, user_id: str, is_admin: bool = False) -> None:
        require_document_id(group_id, "group_id")
        require_document_id(user_id, "user_id")

        group = await self.get_by_id(group_id)
        if group.is_member(user_id):
            raise InvalidArgumentError(
                f"User '{user_id}' is already a member of group '{group_id}'"
            )
        members = [*group.member_ids, user_id]

        cascade = (
            Cascade(f"add {user_id} to group {group_id}")
            .step(
                "add to group",
                lambda: self.store.patch_document(
                    GROUPS_COLLECTION,
                    group_id,
                    {"memberIds": members, "updatedAt": now_ms()},
                ),
            )
            .step(
                "write membership",
                lambda: self._write_membership(
                    Membership.for_member(user_id, group_id, is_admin=is_admin)
                ),
            )
            .step(
                "add chat participant",
                lambda: self._sync_chat_participants(group_id, members),
            )
        )
        with self.store_errors(f"add member {user_id} to {group_id}"):
            await cascade.run()
        self.logger.info(f"User {user_id} joined group {group_id} (admin={is_admin})")

    async def remove_member(self, group_id: str, user_id: str) -> None:
        require_document_id(group_id, "group_id")
        require_document_id(user_id, "user_id")

        group = await self.get_by_id(group_id)
        if not group.is_member(user_id):
            raise NotFoundError(
                MEMBERSHIPS_COLLECTION,
                Membership.make_id(user_id, group_id),
                f"User '{user_id}' is not a member of group '{group_id}'",
            )

        admins = await self._admin_ids(group)
        if user_id in admins and len(admins) == 1:
            self.logger.warning(f"Refusing to remove last admin {user_id} of {group_id}")
            raise LastAdminError(group_id, user_id)

        members = [m for m in group.member_ids if m != user_id]
        group_patch = {"memberIds": members, "updatedAt": now_ms()}
        if group.is_admin(user_id):
            # Hand the primary admin role to the next admin in member order
            group_patch["adminId"] = next(a for a in admins if a != user_id)

        cascade = (
            Cascade(f"remove {user_id} from group {group_id}")
            .step(
                "remove from group",
                lambda: self.store.patch_document(GROUPS_COLLECTION, group_id, group_patch),
            )
            .step(
                "delete membership",
                lambda: delete_if_exists(
                    self.store,
                    MEMBERSHIPS_COLLECTION,
                    Membership.make_id(user_id, group_id),
                ),
            )
            .step(
                "remove chat participant",
                lambda: self._sync_chat_participants(group_id, members),
            )
        )
        with self.store_errors(f"remove member {user_id} from {group_id}"):
            await cascade.run()
        self.logger.info(f"User {user_id} left group {group_id}")
