"""GitHub Actions reporter using workflow commands and the job step summary."""

import os
from pathlib import Path
from typing import Callable

import structlog
import typer

from github_label_manager.reporting.base import AnnotationProperties, SyncReporter
from github_label_manager.synchronize.models import OperationType, SyncOperation
from github_label_manager.synchronize.results import SyncResult
from github_label_manager.utils.constants import SUMMARY_COLLAPSE_THRESHOLD, SUMMARY_DESCRIPTION_WIDTH

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a workflow command property value."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_workflow_command(command: str, message: str, properties: AnnotationProperties | None = None) -> str:
    """Render a '::command key=value,...::message' workflow command."""
    params: list[str] = []
    if properties is not None:
        for key, value in (
            ("title", properties.title),
            ("file", properties.file),
            ("line", properties.start_line),
            ("endLine", properties.end_line),
            ("col", properties.start_column),
            ("endColumn", properties.end_column),
        ):
            if value is not None:
                params.append(f"{key}={escape_property(str(value))}")
    joined = f" {','.join(params)}" if params else ""
    return f"::{command}{joined}::{escape_data(message)}"


def describe_action(operation: SyncOperation) -> str:
    """Human-readable action column for the summary table."""
    if operation.type == OperationType.CREATE:
        return ":new: Created"
    if operation.type == OperationType.UPDATE:
        return ":pencil2: Updated"
    if operation.type == OperationType.RENAME:
        return f':arrows_counterclockwise: Renamed from "{operation.from_label}"'
    if operation.type == OperationType.DELETE:
        return ":wastebasket: Deleted"
    return operation.type.value


def format_operations_table(operations: list[SyncOperation]) -> str:
    """Format operations as a Markdown table with color swatches."""
    rows = ["| Label | Action | Color | Description |", "|-------|--------|-------|-------------|"]
    for operation in operations:
        details = operation.details
        color = f"`#{details.color}`" if details is not None and details.color else ""
        description = details.description[:SUMMARY_DESCRIPTION_WIDTH] if details is not None and details.description else ""
        rows.append(f"| {operation.label} | {describe_action(operation)} | {color} | {description} |")
    return "\n".join(rows)


def render_step_summary(result: SyncResult) -> str:
    """Render the Markdown step summary for a finished run."""
    summary = result.summary
    failed_operations = result.failed_operations
    if summary.changed == 0 and not failed_operations:
        return f"## Label Sync :white_check_mark:\n\nAll {summary.skipped} label(s) already in sync. No changes needed.\n"

    status = ":white_check_mark:" if result.success else ":x:"
    sections = [
        f"## Label Sync {status}",
        "| Created | Updated | Renamed | Deleted | Failed |\n|---------|---------|---------|---------|--------|\n"
        f"| {summary.created} | {summary.updated} | {summary.renamed} | {summary.deleted} | {summary.failed} |",
    ]

    changed_operations = result.changed_operations
    if changed_operations:
        table = format_operations_table(changed_operations)
        if len(changed_operations) >= SUMMARY_COLLAPSE_THRESHOLD:
            sections.append(f"<details><summary>Operation Details</summary>\n\n{table}\n\n</details>")
        else:
            sections.append(table)

    if failed_operations:
        sections.append("### Failed Operations")
        sections.append("\n".join(f"- {op.label} ({op.type.value}): {op.error or 'Unknown error'}" for op in failed_operations))

    return "\n\n".join(sections) + "\n"


class ActionsReporter(SyncReporter):
    """Writes GitHub Actions workflow commands to stdout.

    Warnings, errors and notices become annotations on the configuration file
    when annotation properties are given. Skips are only visible with step
    debugging enabled.
    """

    def __init__(self, summary_path: Path | None = None, write: Callable[[str], None] | None = None) -> None:
        if summary_path is None and os.environ.get("GITHUB_STEP_SUMMARY"):
            summary_path = Path(os.environ["GITHUB_STEP_SUMMARY"])
        self.summary_path = summary_path
        self._write = write or typer.echo

    def debug(self, message: str) -> None:
        self._write(format_workflow_command("debug", message))

    def info(self, message: str) -> None:
        self._write(message)

    def success(self, message: str) -> None:
        self._write(message)

    def skip(self, message: str) -> None:
        self.debug(message)

    def warn(self, message: str, properties: AnnotationProperties | None = None) -> None:
        self._write(format_workflow_command("warning", message, properties))

    def error(self, message: str, properties: AnnotationProperties | None = None) -> None:
        self._write(format_workflow_command("error", message, properties))

    def notice(self, message: str, properties: AnnotationProperties | None = None) -> None:
        self._write(format_workflow_command("notice", message, properties))

    def start_group(self, name: str) -> None:
        self._write(f"::group::{escape_data(name)}")

    def end_group(self) -> None:
        self._write("::endgroup::")

    def set_failed(self, message: str | BaseException) -> None:
        self.error(str(message))

    def write_summary(self, result: SyncResult) -> None:
        if self.summary_path is None:
            logger.info("GITHUB_STEP_SUMMARY is not set, skipping step summary")
            return
        with open(self.summary_path, "a", encoding="utf-8") as f:
            f.write(render_step_summary(result))
        logger.info("Wrote step summary", path=str(self.summary_path))
