"""Base ABC for label stores."""

from abc import ABC, abstractmethod

from github_label_manager.schemas.labels import RemoteLabel


class LabelStoreBase(ABC):
    """Base ABC for label stores consumed by the reconciliation engine.

    Mutating methods may return None to signal that the call was accepted
    without changing state, which is how dry-run stores behave.
    """

    @abstractmethod
    async def list_labels(self) -> list[RemoteLabel]:
        """List every label in the repository. Raises on transport or API failure."""
        pass

    @abstractmethod
    async def get_label(self, name: str) -> RemoteLabel | None:
        """Get a label by name, or None if it does not exist."""
        pass

    @abstractmethod
    async def create_label(self, name: str, color: str | None = None, description: str | None = None) -> RemoteLabel | None:
        """Create a label."""
        pass

    @abstractmethod
    async def update_label(
        self,
        name: str,
        new_name: str | None = None,
        color: str | None = None,
        description: str | None = None,
    ) -> RemoteLabel | None:
        """Update a label, renaming it when new_name is given."""
        pass

    @abstractmethod
    async def delete_label(self, name: str) -> None:
        """Delete a label."""
        pass
