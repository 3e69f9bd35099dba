"""
Domain exceptions for the echostore repository layer.

Every repository operation either returns its result or raises one of these.
Input problems are reported before any store call; store problems are
wrapped, never swallowed.
"""


class EchoStoreError(Exception):
    """Base exception for all repository errors."""

    def __init__(self, message: str, code: str = "ECHOSTORE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ============================================================================
# Caller errors
# ============================================================================


class InvalidArgumentError(EchoStoreError):
    """Raised when a required input is missing or malformed."""

    def __init__(self, message: str, code: str = "INVALID_ARGUMENT"):
        super().__init__(message, code)


class LastAdminError(InvalidArgumentError):
    """Raised when removing a member would leave a group without an admin."""

    def __init__(self, group_id: str, user_id: str):
        self.group_id = group_id
        self.user_id = user_id
        super().__init__(
            f"User '{user_id}' is the only admin of group '{group_id}'; "
            "promote another member first",
            "LAST_ADMIN",
        )


class NotFoundError(EchoStoreError):
    """Raised when a referenced document or path does not exist."""

    def __init__(self, collection: str, document_id: str, message: str | None = None):
        self.collection = collection
        self.document_id = document_id
        super().__init__(
            message or f"Document '{document_id}' not found in '{collection}'",
            "NOT_FOUND",
        )


# ============================================================================
# Store errors
# ============================================================================


class StoreFailureError(EchoStoreError):
    """Raised when the backing store's own operation failed."""

    def __init__(self, message: str, code: str = "STORE_FAILURE"):
        super().__init__(message, code)


class CascadeError(StoreFailureError):
    """
    Raised when a multi-step write stops partway through.

    Steps listed in completed_steps were applied and are not rolled back;
    the caller decides whether to retry the pending ones.
    """

    def __init__(
        self,
        operation: str,
        failed_step: str,
        completed_steps: list[str],
        pending_steps: list[str],
        cause: BaseException | None = None,
    ):
        self.operation = operation
        self.failed_step = failed_step
        self.completed_steps = completed_steps
        self.pending_steps = pending_steps
        detail = f": {cause}" if cause else ""
        super().__init__(
            f"{operation} failed at step '{failed_step}' "
            f"after {len(completed_steps)} completed step(s){detail}",
            "CASCADE_FAILURE",
        )
