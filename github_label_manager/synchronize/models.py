"""Models describing individual label synchronization operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OperationType(str, Enum):
    """Kinds of decisions the reconciliation engine records."""

    CREATE = "create"
    UPDATE = "update"
    RENAME = "rename"
    DELETE = "delete"
    SKIP = "skip"


@dataclass(frozen=True)
class OperationDetails:
    """Values involved in an operation, for reporting."""

    color: str | None = None
    description: str | None = None
    old_color: str | None = None
    old_description: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Return the populated fields only."""
        data = {
            "color": self.color,
            "description": self.description,
            "oldColor": self.old_color,
            "oldDescription": self.old_description,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class SyncOperation:
    """A single decision made while synchronizing labels.

    Once recorded, an operation is never modified.
    """

    type: OperationType
    label: str
    success: bool
    from_label: str | None = None
    error: str | None = None
    details: OperationDetails | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value, "label": self.label, "success": self.success}
        if self.from_label is not None:
            data["from"] = self.from_label
        if self.error is not None:
            data["error"] = self.error
        if self.details is not None:
            details = self.details.to_dict()
            if details:
                data["details"] = details
        return data
