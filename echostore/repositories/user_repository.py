"""
User repository over the document store.

Users live in the "users" collection keyed by user id.
"""

from ..domain.collections import FIELD_EMAIL, USERS_COLLECTION
from ..domain.exceptions import InvalidArgumentError, NotFoundError
from ..domain.interfaces.user_repository import IUserRepository
from ..domain.models import User
from .base import StoreRepository, require_document_id, require_non_empty


class UserRepository(StoreRepository, IUserRepository):
    """
    CRUD and email lookup for users.

    add is last-write-wins; update merges only the fields the caller
    explicitly provided (see DocumentModel.to_patch), so a User built as
    User(id="u1", is_online=False) changes presence and nothing else.
    """

    @staticmethod
    def _require_user(user: User | None) -> User:
        if user is None:
            raise InvalidArgumentError("User must not be null")
        if not isinstance(user, User):
            raise InvalidArgumentError(f"Expected User, got {type(user).__name__}")
        require_document_id(user.id, "user.id")
        return user

    async def get_by_id(self, user_id: str) -> User:
        require_document_id(user_id, "user_id")
        self.logger.debug(f"Fetching user with ID: {user_id}")

        try:
            with self.store_errors(f"get user {user_id}"):
                document = await self.store.get_document(USERS_COLLECTION, user_id)
        except NotFoundError:
            self.logger.error(f"User not found: {user_id}")
            raise
        return User.from_document(document)

    async def get_all(self) -> list[User]:
        self.logger.debug("Fetching all users")
        with self.store_errors("scan users"):
            documents = await self.store.scan_collection(USERS_COLLECTION)
        users = [User.from_document(doc) for doc in documents]
        self.logger.debug(f"Fetched {len(users)} users")
        return users

    async def add(self, user: User) -> None:
        user = self._require_user(user)
        self.logger.debug(f"Adding user: {user.id}")

        with self.store_errors(f"add user {user.id}"):
            await self.store.set_document(USERS_COLLECTION, user.id, user.to_document())
        self.logger.info(f"User added: {user.id}")

    async def update(self, user: User) -> None:
        user = self._require_user(user)
        patch = user.to_patch(exclude={"id"})
        self.logger.debug(f"Updating user {user.id} fields={sorted(patch)}")

        try:
            with self.store_errors(f"update user {user.id}"):
                await self.store.patch_document(USERS_COLLECTION, user.id, patch)
        except NotFoundError:
            self.logger.error(f"Cannot update missing user: {user.id}")
            raise
        self.logger.info(f"User updated: {user.id}")

    async def delete(self, user_id: str) -> None:
        require_document_id(user_id, "user_id")
        self.logger.debug(f"Deleting user: {user_id}")

        with self.store_errors(f"delete user {user_id}"):
            await self.store.delete_document(USERS_COLLECTION, user_id)
        self.logger.info(f"User deleted: {user_id}")

    async def get_by_email(self, email: str) -> User:
        require_non_empty(email, "email")
        self.logger.debug(f"Querying user by email: {email}")

        with self.store_errors(f"query users by email {email}"):
            documents = await self.store.query_by_field(
                USERS_COLLECTION, FIELD_EMAIL, email
            )

        if not documents:
            raise NotFoundError(
                USERS_COLLECTION, email, f"User not found with email: {email}"
            )
        if len(documents) > 1:
            self.logger.warning(
                f"Multiple users ({len(documents)}) found with email: {email}; "
                "returning the first"
            )
        return User.from_document(documents[0])
