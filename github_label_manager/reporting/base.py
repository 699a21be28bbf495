"""Reporter interface the synchronization engine writes progress to."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from github_label_manager.synchronize.results import SyncResult


@dataclass(frozen=True)
class AnnotationProperties:
    """Marks a location in the configuration file that a message refers to."""

    title: str | None = None
    file: str | None = None
    start_line: int | None = None
    end_line: int | None = None
    start_column: int | None = None
    end_column: int | None = None


class SyncReporter(ABC):
    """Push-only sink for human-facing synchronization output.

    Reporters never influence decisions: the engine ignores every return value.
    """

    @abstractmethod
    def debug(self, message: str) -> None:
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def skip(self, message: str) -> None:
        pass

    @abstractmethod
    def warn(self, message: str, properties: AnnotationProperties | None = None) -> None:
        pass

    @abstractmethod
    def error(self, message: str, properties: AnnotationProperties | None = None) -> None:
        pass

    @abstractmethod
    def notice(self, message: str, properties: AnnotationProperties | None = None) -> None:
        pass

    @abstractmethod
    def start_group(self, name: str) -> None:
        pass

    @abstractmethod
    def end_group(self) -> None:
        pass

    @abstractmethod
    def set_failed(self, message: str | BaseException) -> None:
        """Mark the run as failed."""
        pass

    @abstractmethod
    def write_summary(self, result: SyncResult) -> None:
        """Report the outcome of a finished run."""
        pass

    @contextmanager
    def group(self, name: str) -> Iterator[None]:
        """Run the enclosed block inside a collapsible group."""
        self.start_group(name)
        try:
            yield
        finally:
            self.end_group()


class NullReporter(SyncReporter):
    """Reporter that discards everything."""

    def debug(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def skip(self, message: str) -> None:
        pass

    def warn(self, message: str, properties: AnnotationProperties | None = None) -> None:
        pass

    def error(self, message: str, properties: AnnotationProperties | None = None) -> None:
        pass

    def notice(self, message: str, properties: AnnotationProperties | None = None) -> None:
        pass

    def start_group(self, name: str) -> None:
        pass

    def end_group(self) -> None:
        pass

    def set_failed(self, message: str | BaseException) -> None:
        pass

    def write_summary(self, result: SyncResult) -> None:
        pass
