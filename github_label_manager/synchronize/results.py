"""Contains results of the label synchronization workflow."""

from dataclasses import dataclass
from typing import Any, Iterable

from github_label_manager.synchronize.models import OperationDetails, OperationType, SyncOperation


@dataclass(frozen=True)
class SyncSummary:
    """Counters over the recorded operations.

    Every operation increments exactly one counter: failed operations count as
    failed regardless of their type.
    """

    created: int = 0
    updated: int = 0
    renamed: int = 0
    deleted: int = 0
    skipped: int = 0
    failed: int = 0

    @classmethod
    def from_operations(cls, operations: Iterable[SyncOperation]) -> "SyncSummary":
        """Fold a sequence of operations into counters."""
        counts = {field: 0 for field in ("created", "updated", "renamed", "deleted", "skipped", "failed")}
        counter_by_type = {
            OperationType.CREATE: "created",
            OperationType.UPDATE: "updated",
            OperationType.RENAME: "renamed",
            OperationType.DELETE: "deleted",
            OperationType.SKIP: "skipped",
        }
        for operation in operations:
            if operation.success:
                counts[counter_by_type[operation.type]] += 1
            else:
                counts["failed"] += 1
        return cls(**counts)

    @property
    def changed(self) -> int:
        """Number of successful mutating operations."""
        return self.created + self.updated + self.renamed + self.deleted

    def to_dict(self) -> dict[str, int]:
        return {
            "created": self.created,
            "updated": self.updated,
            "renamed": self.renamed,
            "deleted": self.deleted,
            "skipped": self.skipped,
            "failed": self.failed,
        }


class SyncResult:
    """Contains the ordered operations of one synchronization run and their summary."""

    def __init__(self, operations: Iterable[SyncOperation]) -> None:
        """Initialize the result; the summary is derived from the operations."""
        self.operations: tuple[SyncOperation, ...] = tuple(operations)
        self.summary = SyncSummary.from_operations(self.operations)

    @property
    def success(self) -> bool:
        """True if and only if no operation failed."""
        return self.summary.failed == 0

    @property
    def changed_operations(self) -> list[SyncOperation]:
        """Successful operations that changed (or would change) the label store."""
        return [operation for operation in self.operations if operation.success and operation.type != OperationType.SKIP]

    @property
    def failed_operations(self) -> list[SyncOperation]:
        return [operation for operation in self.operations if not operation.success]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the result."""
        return {
            "success": self.success,
            "operations": [operation.to_dict() for operation in self.operations],
            "summary": self.summary.to_dict(),
        }

    def __repr__(self) -> str:
        return f"SyncResult(success={self.success}, summary={self.summary})"


class SyncResultBuilder:
    """Append-only accumulator of operations used during a synchronization run."""

    def __init__(self) -> None:
        self._operations: list[SyncOperation] = []

    def record(
        self,
        operation_type: OperationType,
        label: str,
        success: bool = True,
        from_label: str | None = None,
        error: str | None = None,
        details: OperationDetails | None = None,
    ) -> SyncOperation:
        """Record one terminal decision and return it."""
        operation = SyncOperation(
            type=operation_type,
            label=label,
            success=success,
            from_label=from_label,
            error=error,
            details=details,
        )
        self._operations.append(operation)
        return operation

    @property
    def operations(self) -> tuple[SyncOperation, ...]:
        return tuple(self._operations)

    def build(self) -> SyncResult:
        return SyncResult(self._operations)
