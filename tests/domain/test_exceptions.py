"""
Tests for the error taxonomy.
"""

from echostore.domain.exceptions import (
    CascadeError,
    EchoStoreError,
    InvalidArgumentError,
    LastAdminError,
    NotFoundError,
    StoreFailureError,
)


def test_last_admin_is_invalid_argument():
    error = LastAdminError("g1", "u1")
    assert isinstance(error, InvalidArgumentError)
    assert error.code == "LAST_ADMIN"
    assert error.group_id == "g1"
    assert "u1" in str(error)


def test_not_found_carries_location():
    error = NotFoundError("users", "u1")
    assert error.code == "NOT_FOUND"
    assert (error.collection, error.document_id) == ("users", "u1")
    assert str(error) == "Document 'u1' not found in 'users'"


def test_cascade_error_is_store_failure():
    cause = RuntimeError("boom")
    error = CascadeError("delete group g1", "delete chat", ["delete messages"], ["delete group"], cause)

    assert isinstance(error, StoreFailureError)
    assert isinstance(error, EchoStoreError)
    assert error.code == "CASCADE_FAILURE"
    assert error.completed_steps == ["delete messages"]
    assert error.pending_steps == ["delete group"]
    assert "boom" in str(error)
