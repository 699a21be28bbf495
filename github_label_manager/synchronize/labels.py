"""Contains synchronization logic for GitHub labels.

Desired labels are processed one at a time, in configuration order, against a
working map of the repository's labels. The map is seeded from a single
listing and updated after every successful operation so that later decisions
see the effect of earlier ones (a rename frees the alias name, a created label
now exists). A deletion sweep follows, using the explicitly selected
DeletionMode.
"""

import time

import structlog

from github_label_manager.configuration.models import DeletionMode
from github_label_manager.github.abc import LabelStoreBase
from github_label_manager.reporting.base import AnnotationProperties, NullReporter, SyncReporter
from github_label_manager.schemas.labels import LabelConfigModel, LabelModel, RemoteLabel
from github_label_manager.synchronize.models import OperationDetails, OperationType
from github_label_manager.synchronize.results import SyncResult, SyncResultBuilder
from github_label_manager.synchronize.utils import colors_equal, descriptions_equal, matches_any_pattern, normalize_color
from github_label_manager.utils.constants import ALL_LABELS_SENTINEL, DEFAULT_LABEL_COLOR, LIST_LABELS_FAILED_MESSAGE
from github_label_manager.utils.helpers import format_store_error

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def get_annotation(config: LabelConfigModel, label_name: str, title: str, is_delete: bool = False) -> AnnotationProperties:
    """Build annotation properties pointing at the label's line in the configuration file."""
    if config.meta is None:
        return AnnotationProperties(title=title)
    lines = config.meta.delete_lines if is_delete else config.meta.label_lines
    return AnnotationProperties(title=title, file=config.meta.file_path, start_line=lines.get(label_name))


def find_rename_source(desired_label: LabelModel, existing_labels: dict[str, RemoteLabel]) -> str | None:
    """Return the first alias, in configuration order, that exists in the repository.

    Only applies when the desired name itself does not exist yet. When several
    aliases exist, the first one wins and the others are left for a later run.
    """
    if desired_label.name in existing_labels or not desired_label.aliases:
        return None
    for alias in desired_label.aliases:
        if alias in existing_labels:
            return alias
    return None


def decide_github_label_sync_action(desired_label: LabelModel, github_label: RemoteLabel | None = None) -> OperationType:
    """Compare a desired label and a GitHub label, and decide whether to create, update, or skip.

    Key is label name. Color only takes part when the desired label specifies
    one; a missing description and an empty one are considered equal.
    """
    if github_label is None:
        logger.info("Label not found in GitHub", label_name=desired_label.name)
        return OperationType.CREATE

    color_matches = colors_equal(github_label.color, normalize_color(desired_label.color))
    if color_matches is False or not descriptions_equal(github_label.description, desired_label.description):
        logger.info(
            "Label needs to be updated",
            label_name=desired_label.name,
            current_color=github_label.color,
            new_color=desired_label.color,
            current_description=github_label.description,
            new_description=desired_label.description,
        )
        return OperationType.UPDATE

    logger.info("Label is up to date", label_name=desired_label.name)
    return OperationType.SKIP


async def rename_github_label(
    desired_label: LabelModel,
    alias: str,
    existing_labels: dict[str, RemoteLabel],
    store: LabelStoreBase,
    results: SyncResultBuilder,
    reporter: SyncReporter,
    config: LabelConfigModel,
    dry_run: bool,
) -> None:
    """Rename an alias into the desired label with one combined update call."""
    clean_color = normalize_color(desired_label.color)
    description = desired_label.description or ""
    if dry_run:
        reporter.info(f'[dry-run] Would rename: "{alias}" -> "{desired_label.name}"')
    else:
        reporter.notice(f'"{alias}" -> "{desired_label.name}"', get_annotation(config, desired_label.name, "Label Renamed"))

    try:
        await store.update_label(alias, new_name=desired_label.name, color=clean_color, description=description)
    except Exception as exc:
        error = format_store_error(exc)
        logger.error("Failed to rename label", label_name=desired_label.name, alias=alias, error=error)
        reporter.error(f"Rename failed: {error}", get_annotation(config, desired_label.name, "Rename Failed"))
        # The alias still exists under its old name, so creating the desired
        # label now would duplicate it.
        results.record(OperationType.RENAME, desired_label.name, success=False, from_label=alias, error=error)
        return

    results.record(
        OperationType.RENAME,
        desired_label.name,
        from_label=alias,
        details=OperationDetails(color=clean_color, description=desired_label.description),
    )
    moved_label = existing_labels.pop(alias)
    existing_labels[desired_label.name] = RemoteLabel(
        name=desired_label.name,
        color=clean_color or moved_label.color,
        description=description,
    )
    logger.info("Renamed label", label_name=desired_label.name, alias=alias)


async def create_github_label(
    desired_label: LabelModel,
    existing_labels: dict[str, RemoteLabel],
    store: LabelStoreBase,
    results: SyncResultBuilder,
    reporter: SyncReporter,
    config: LabelConfigModel,
    dry_run: bool,
) -> None:
    """Create a label that does not exist in the repository yet."""
    clean_color = normalize_color(desired_label.color)
    color_display = f"#{clean_color}" if clean_color else "default"
    if dry_run:
        reporter.info(f'[dry-run] Would create: "{desired_label.name}" ({color_display})')
    else:
        reporter.success(f'Creating: "{desired_label.name}" ({color_display})')

    try:
        await store.create_label(desired_label.name, color=clean_color, description=desired_label.description)
    except Exception as exc:
        error = format_store_error(exc)
        logger.error("Failed to create label", label_name=desired_label.name, error=error)
        reporter.error(f"Create failed: {error}", get_annotation(config, desired_label.name, "Create Failed"))
        results.record(OperationType.CREATE, desired_label.name, success=False, error=error)
        return

    results.record(
        OperationType.CREATE,
        desired_label.name,
        details=OperationDetails(color=clean_color, description=desired_label.description),
    )
    existing_labels[desired_label.name] = RemoteLabel(
        name=desired_label.name,
        color=clean_color or DEFAULT_LABEL_COLOR,
        description=desired_label.description,
    )
    logger.info("Created label", label_name=desired_label.name)


async def update_github_label(
    desired_label: LabelModel,
    github_label: RemoteLabel,
    existing_labels: dict[str, RemoteLabel],
    store: LabelStoreBase,
    results: SyncResultBuilder,
    reporter: SyncReporter,
    config: LabelConfigModel,
    dry_run: bool,
) -> None:
    """Update the color and description of an existing label."""
    clean_color = normalize_color(desired_label.color)
    description = desired_label.description or ""
    changes: list[str] = []
    if colors_equal(github_label.color, clean_color) is False:
        changes.append(f"color: #{github_label.color} -> #{clean_color}")
    if not descriptions_equal(github_label.description, desired_label.description):
        changes.append("description changed")
    change_text = ", ".join(changes)
    if dry_run:
        reporter.info(f'[dry-run] Would update: "{desired_label.name}" ({change_text})')
    else:
        reporter.info(f'Updating: "{desired_label.name}" ({change_text})')

    try:
        await store.update_label(github_label.name, color=clean_color, description=description)
    except Exception as exc:
        error = format_store_error(exc)
        logger.error("Failed to update label", label_name=desired_label.name, error=error)
        reporter.error(f"Update failed: {error}", get_annotation(config, desired_label.name, "Update Failed"))
        results.record(OperationType.UPDATE, desired_label.name, success=False, error=error)
        return

    results.record(
        OperationType.UPDATE,
        desired_label.name,
        details=OperationDetails(
            color=clean_color,
            description=desired_label.description,
            old_color=github_label.color,
            old_description=github_label.description,
        ),
    )
    existing_labels[desired_label.name] = RemoteLabel(
        name=github_label.name,
        color=clean_color or github_label.color,
        description=description,
    )
    logger.info("Updated label", label_name=desired_label.name, changes=changes)


async def delete_github_label(
    name: str,
    existing_labels: dict[str, RemoteLabel],
    store: LabelStoreBase,
    results: SyncResultBuilder,
    reporter: SyncReporter,
    config: LabelConfigModel,
    dry_run: bool,
) -> None:
    """Delete a label that is present in the working map."""
    github_label = existing_labels[name]
    if dry_run:
        reporter.info(f'[dry-run] Would delete: "{name}"')
    else:
        reporter.notice(f'"{name}"', get_annotation(config, name, "Label Deleted", is_delete=True))

    try:
        await store.delete_label(name)
    except Exception as exc:
        error = format_store_error(exc)
        logger.error("Failed to delete label", label_name=name, error=error)
        reporter.error(f"Delete failed: {error}", get_annotation(config, name, "Delete Failed", is_delete=True))
        results.record(OperationType.DELETE, name, success=False, error=error)
        return

    results.record(
        OperationType.DELETE,
        name,
        details=OperationDetails(color=github_label.color, description=github_label.description),
    )
    del existing_labels[name]
    logger.info("Deleted label", label_name=name)


async def delete_listed_labels(
    existing_labels: dict[str, RemoteLabel],
    store: LabelStoreBase,
    results: SyncResultBuilder,
    reporter: SyncReporter,
    config: LabelConfigModel,
    dry_run: bool,
) -> None:
    """Delete exactly the labels named under 'delete'. Missing names are skipped."""
    for name in config.delete or []:
        if name in existing_labels:
            await delete_github_label(name, existing_labels, store, results, reporter, config, dry_run)
        else:
            reporter.info(f'Delete target not found: "{name}" (already removed)')
            results.record(OperationType.SKIP, name)


def protected_label_names(config: LabelConfigModel) -> set[str]:
    """Names that declarative deletion never removes: desired names and all of their aliases."""
    protected: set[str] = set()
    for desired_label in config.labels:
        protected.add(desired_label.name)
        protected.update(desired_label.aliases or [])
    return protected


async def delete_undesired_labels(
    existing_labels: dict[str, RemoteLabel],
    store: LabelStoreBase,
    results: SyncResultBuilder,
    reporter: SyncReporter,
    config: LabelConfigModel,
    dry_run: bool,
) -> None:
    """Delete every label that is not desired, not an alias, and not ignored."""
    protected = protected_label_names(config)
    for name in list(existing_labels):
        if name in protected:
            continue
        if matches_any_pattern(name, config.ignore):
            logger.debug("Label matches an ignore pattern, keeping it", label_name=name)
            continue
        await delete_github_label(name, existing_labels, store, results, reporter, config, dry_run)


async def reconcile(
    config: LabelConfigModel,
    current_labels: list[RemoteLabel],
    store: LabelStoreBase,
    reporter: SyncReporter | None = None,
    deletion_mode: DeletionMode = DeletionMode.DECLARATIVE,
    dry_run: bool = False,
) -> SyncResult:
    """Converge the store onto the configuration, starting from a snapshot of its labels.

    Per-label store failures are recorded in the result and never raised.
    """
    reporter = reporter or NullReporter()
    results = SyncResultBuilder()
    existing_labels: dict[str, RemoteLabel] = {github_label.name: github_label for github_label in current_labels}

    for desired_label in config.labels:
        alias = find_rename_source(desired_label, existing_labels)
        if alias is not None:
            await rename_github_label(desired_label, alias, existing_labels, store, results, reporter, config, dry_run)
            continue

        github_label = existing_labels.get(desired_label.name)
        decision = decide_github_label_sync_action(desired_label, github_label)
        if decision == OperationType.CREATE:
            await create_github_label(desired_label, existing_labels, store, results, reporter, config, dry_run)
        elif decision == OperationType.UPDATE and github_label is not None:
            await update_github_label(desired_label, github_label, existing_labels, store, results, reporter, config, dry_run)
        else:
            reporter.skip(f'Up-to-date: "{desired_label.name}"')
            results.record(OperationType.SKIP, desired_label.name)

    if deletion_mode == DeletionMode.EXPLICIT:
        await delete_listed_labels(existing_labels, store, results, reporter, config, dry_run)
    else:
        await delete_undesired_labels(existing_labels, store, results, reporter, config, dry_run)

    return results.build()


async def sync_github_labels(
    config: LabelConfigModel,
    store: LabelStoreBase,
    reporter: SyncReporter | None = None,
    deletion_mode: DeletionMode = DeletionMode.DECLARATIVE,
    dry_run: bool = False,
) -> SyncResult:
    """List the repository's labels and reconcile them with the configuration.

    If the listing fails nothing else is attempted: the result holds a single
    failed skip operation for every label ('*').
    """
    reporter = reporter or NullReporter()
    if dry_run:
        reporter.info("[dry-run] No changes will be made")
    if deletion_mode == DeletionMode.DECLARATIVE and config.delete:
        reporter.warn(
            "'delete' is deprecated and ignored in declarative mode: labels not listed under 'labels' are deleted "
            "unless they match an 'ignore' pattern. Use --deletion-mode explicit to delete listed labels only.",
            AnnotationProperties(title="Deprecated Field", file=config.meta.file_path if config.meta else None),
        )

    start_time = time.time()
    logger.info("Fetching existing labels from GitHub", start_time=start_time)
    try:
        current_labels = await store.list_labels()
    except Exception as exc:
        error = format_store_error(exc)
        logger.error("Failed to list labels", error=error)
        reporter.error(f"Failed to list labels: {error}")
        results = SyncResultBuilder()
        results.record(OperationType.SKIP, ALL_LABELS_SENTINEL, success=False, error=LIST_LABELS_FAILED_MESSAGE)
        return results.build()
    logger.info("Fetched existing labels from GitHub", duration=round(time.time() - start_time, 2), label_count=len(current_labels))

    result = await reconcile(config, current_labels, store, reporter=reporter, deletion_mode=deletion_mode, dry_run=dry_run)
    logger.info("Sync complete", duration=round(time.time() - start_time, 2), **result.summary.to_dict())
    reporter.info("Sync complete")
    return result
