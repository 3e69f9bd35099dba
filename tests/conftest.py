"""
Pytest configuration and common fixtures for echostore tests.

Provides a fresh in-memory store per test and repositories wired to it.
"""

import pytest

from echostore.core.factory import create_repositories
from echostore.core.logging.context import clear_operation_context
from echostore.domain.models import Group, Message, User
from echostore.persistence.memory import MemoryDocumentStore
from echostore.repositories import (
    ChatRepository,
    GroupRepository,
    MessageRepository,
    UserRepository,
)


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Keep tests independent of a developer's .env and shell."""
    monkeypatch.setenv("ENVIRONMENT", "DEV")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.delenv("REDIS_URL", raising=False)
    yield
    clear_operation_context()


@pytest.fixture
def store() -> MemoryDocumentStore:
    """Fresh reference store."""
    return MemoryDocumentStore()


@pytest.fixture
def user_repo(store) -> UserRepository:
    return UserRepository(store)


@pytest.fixture
def message_repo(store) -> MessageRepository:
    return MessageRepository(store)


@pytest.fixture
def chat_repo(store) -> ChatRepository:
    return ChatRepository(store)


@pytest.fixture
def group_repo(store) -> GroupRepository:
    return GroupRepository(store)


@pytest.fixture
def repos(store):
    """All repositories and the conversation service over one store."""
    return create_repositories(store)


@pytest.fixture
def sample_user() -> User:
    return User(
        id="u1",
        display_name="Alice",
        email="alice@example.com",
        profile_image_url="https://cdn.example.com/alice.png",
        is_online=True,
        last_seen=1_700_000_000_000,
        created_at=1_600_000_000_000,
        updated_at=1_600_000_000_000,
    )


@pytest.fixture
def make_message():
    """Factory for text messages in one chat."""

    def _make(
        message_id: str | None,
        timestamp: int,
        chat_id: str = "c1",
        content: str | None = None,
        sender_id: str = "u1",
    ) -> Message:
        return Message(
            id=message_id,
            chat_id=chat_id,
            sender_id=sender_id,
            content=content if content is not None else f"message {message_id}",
            timestamp=timestamp,
        )

    return _make


@pytest.fixture
def sample_group() -> Group:
    return Group(
        name="Climbing",
        description="Weekend trips",
        admin_id="u1",
        member_ids=["u1", "u2", "u3"],
    )
