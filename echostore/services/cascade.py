"""
Cascade - sequential multi-document writes without atomicity.

The store offers no cross-document transaction, so related writes (a group
and its chat, a group delete and everything hanging off it) run as an
ordered list of steps. Each step should be idempotent so that a failed
cascade can simply be run again.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from ..core.logging.logger import get_logger
from ..domain.exceptions import CascadeError, NotFoundError
from ..domain.interfaces.document_store import IDocumentStore

StepAction = Callable[[], Awaitable[Any]]


class Cascade:
    """
    Fluent runner for ordered store writes.

    Steps run one at a time in the order added. If a step fails after at
    least one step was applied, CascadeError reports what was applied and
    what was not; nothing is rolled back. A failure in the very first step
    re-raises the original error since no state changed.

    Example:
        await (Cascade("delete group g1")
            .step("delete messages", lambda: store.delete_collection(path))
            .step("delete group", lambda: store.delete_document("groups", "g1"))
            .run())
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.steps: list[tuple[str, StepAction]] = []
        self.logger = get_logger(__name__)

    def step(self, name: str, action: StepAction) -> "Cascade":
        """
        Append a step.

        Args:
            name: Human-readable step name used in logs and CascadeError
            action: Zero-argument coroutine function performing the write

        Returns:
            Self for method chaining
        """
        self.steps.append((name, action))
        return self

    async def run(self) -> list[str]:
        """
        Run all steps in order.

        Returns:
            Names of the completed steps

        Raises:
            CascadeError: if a step after the first one fails
        """
        completed: list[str] = []
        for index, (name, action) in enumerate(self.steps):
            self.logger.debug(f"{self.operation}: step {index + 1}/{len(self.steps)} '{name}'")
            try:
                await action()
            except Exception as e:
                if not completed:
                    self.logger.error(f"{self.operation}: first step '{name}' failed: {e}")
                    raise
                pending = [n for n, _ in self.steps[index + 1 :]]
                self.logger.error(
                    f"{self.operation}: step '{name}' failed after {completed}; "
                    f"not applied: {[name, *pending]}"
                )
                raise CascadeError(self.operation, name, completed, pending, cause=e) from e
            completed.append(name)

        self.logger.debug(f"{self.operation}: all {len(completed)} steps applied")
        return completed


async def delete_if_exists(store: IDocumentStore, collection: str, document_id: str) -> bool:
    """
    Idempotent delete.

    Returns:
        True if a document was deleted, False if it was already gone
    """
    try:
        await store.delete_document(collection, document_id)
    except NotFoundError:
        return False
    return True
