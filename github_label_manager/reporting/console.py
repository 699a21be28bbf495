"""Console reporter for local CLI usage."""

import os

import structlog
import typer

from github_label_manager.reporting.base import AnnotationProperties, SyncReporter
from github_label_manager.synchronize.results import SyncResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

LOG_LEVELS: dict[str, tuple[str, str]] = {
    "debug": (typer.colors.BRIGHT_BLACK, "·"),
    "info": (typer.colors.CYAN, "ℹ"),
    "success": (typer.colors.GREEN, "✔"),
    "notice": (typer.colors.BLUE, "✎"),
    "warn": (typer.colors.YELLOW, "⚠"),
    "error": (typer.colors.RED, "✖"),
    "skip": (typer.colors.BRIGHT_BLACK, "→"),
}
"""Color and symbol for each message level."""


def format_annotation(properties: AnnotationProperties | None) -> str:
    """Render annotation properties as a ' (file:line - title)' suffix."""
    if properties is None:
        return ""
    parts: list[str] = []
    if properties.file:
        location = properties.file
        if properties.start_line:
            location += f":{properties.start_line}"
            if properties.start_column:
                location += f":{properties.start_column}"
        parts.append(location)
    if properties.title:
        parts.append(properties.title)
    return f" ({' - '.join(parts)})" if parts else ""


class ConsoleReporter(SyncReporter):
    """Prints colored, symbol-prefixed lines to the terminal.

    Colors are disabled when NO_COLOR is set. Groups are rendered as indentation.
    """

    def __init__(self, verbose: bool = False, use_colors: bool | None = None) -> None:
        self.verbose = verbose
        self.use_colors = "NO_COLOR" not in os.environ if use_colors is None else use_colors
        self.group_depth = 0

    @property
    def indent(self) -> str:
        return "  " * self.group_depth

    def _emit(self, level: str, message: str, err: bool = False) -> None:
        color, symbol = LOG_LEVELS[level]
        prefix = typer.style(symbol, fg=color) if self.use_colors else symbol
        typer.echo(f"{self.indent}{prefix}  {message}", err=err)
        logger.debug("Reporter message", level=level, message=message)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._emit("debug", message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def skip(self, message: str) -> None:
        self._emit("skip", message)

    def warn(self, message: str, properties: AnnotationProperties | None = None) -> None:
        self._emit("warn", message + format_annotation(properties))

    def error(self, message: str, properties: AnnotationProperties | None = None) -> None:
        self._emit("error", message + format_annotation(properties), err=True)

    def notice(self, message: str, properties: AnnotationProperties | None = None) -> None:
        self._emit("notice", message + format_annotation(properties))

    def start_group(self, name: str) -> None:
        title = typer.style(name, bold=True) if self.use_colors else name
        typer.echo(f"{self.indent}▸ {title}")
        self.group_depth += 1

    def end_group(self) -> None:
        self.group_depth = max(0, self.group_depth - 1)

    def set_failed(self, message: str | BaseException) -> None:
        self._emit("error", str(message), err=True)

    def write_summary(self, result: SyncResult) -> None:
        summary = result.summary
        line = (
            f"{summary.created} created, {summary.updated} updated, {summary.renamed} renamed, "
            f"{summary.deleted} deleted, {summary.skipped} skipped, {summary.failed} failed"
        )
        if result.success:
            self._emit("success", f"Sync complete: {line}")
        else:
            self._emit("error", f"Sync finished with failures: {line}", err=True)
