"""In-memory label store, used for tests and offline runs."""

from dataclasses import dataclass, field
from typing import Any, Iterable

from github_label_manager.schemas.labels import RemoteLabel
from github_label_manager.utils.constants import DEFAULT_LABEL_COLOR

from .abc import LabelStoreBase


class LabelStoreError(Exception):
    """Raised by the in-memory store to mimic an API failure."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass
class StoreCall:
    """A call made against the in-memory store."""

    method: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)


class InMemoryLabelStore(LabelStoreBase):
    """Dictionary-backed label store.

    Failures can be injected per method, optionally restricted to one label
    name, with fail(). Every call is appended to calls.
    """

    def __init__(self, labels: Iterable[RemoteLabel] = (), dry_run: bool = False) -> None:
        self.labels: dict[str, RemoteLabel] = {label.name: label for label in labels}
        self.dry_run = dry_run
        self.calls: list[StoreCall] = []
        self._failures: dict[tuple[str, str | None], Exception] = {}

    def fail(self, method: str, error: Exception, name: str | None = None) -> None:
        """Make method raise error, for every label or only for the given name."""
        self._failures[(method, name)] = error

    @property
    def mutation_calls(self) -> list[StoreCall]:
        return [call for call in self.calls if call.method not in ("list_labels", "get_label")]

    def _check_failure(self, method: str, name: str | None = None) -> None:
        error = self._failures.get((method, name)) or self._failures.get((method, None))
        if error is not None:
            raise error

    def _require(self, name: str) -> RemoteLabel:
        existing = self.labels.get(name)
        if existing is None:
            raise LabelStoreError(f"Label {name!r} not found", status=404)
        return existing

    async def list_labels(self) -> list[RemoteLabel]:
        self.calls.append(StoreCall("list_labels"))
        self._check_failure("list_labels")
        return list(self.labels.values())

    async def get_label(self, name: str) -> RemoteLabel | None:
        self.calls.append(StoreCall("get_label", (name,)))
        self._check_failure("get_label", name)
        return self.labels.get(name)

    async def create_label(self, name: str, color: str | None = None, description: str | None = None) -> RemoteLabel | None:
        self.calls.append(StoreCall("create_label", (name,), {"color": color, "description": description}))
        self._check_failure("create_label", name)
        if name in self.labels:
            raise LabelStoreError("Validation Failed: already_exists", status=422)
        if self.dry_run:
            return None
        created = RemoteLabel(name=name, color=(color or DEFAULT_LABEL_COLOR).removeprefix("#").lower(), description=description)
        self.labels[name] = created
        return created

    async def update_label(
        self,
        name: str,
        new_name: str | None = None,
        color: str | None = None,
        description: str | None = None,
    ) -> RemoteLabel | None:
        self.calls.append(StoreCall("update_label", (name,), {"new_name": new_name, "color": color, "description": description}))
        self._check_failure("update_label", name)
        existing = self._require(name)
        if new_name and new_name != name and new_name in self.labels:
            raise LabelStoreError("Validation Failed: already_exists", status=422)
        if self.dry_run:
            return None
        updated = RemoteLabel(
            name=new_name or name,
            color=color.removeprefix("#").lower() if color else existing.color,
            description=description if description is not None else existing.description,
        )
        del self.labels[name]
        self.labels[updated.name] = updated
        return updated

    async def delete_label(self, name: str) -> None:
        self.calls.append(StoreCall("delete_label", (name,)))
        self._check_failure("delete_label", name)
        self._require(name)
        if self.dry_run:
            return None
        del self.labels[name]
        return None
