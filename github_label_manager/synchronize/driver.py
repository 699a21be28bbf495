"""Orchestrates the synchronization of GitHub labels."""

import time

import structlog

from github_label_manager.configuration.exceptions import ConfigError
from github_label_manager.configuration.models import SyncLabelsConfig
from github_label_manager.github.abc import LabelStoreBase
from github_label_manager.github.adapter import GitHubKitAdapter
from github_label_manager.processing.yaml_processor import LabelConfigProcessor
from github_label_manager.reporting.base import SyncReporter
from github_label_manager.reporting.factory import create_reporter
from github_label_manager.synchronize.labels import sync_github_labels
from github_label_manager.synchronize.results import SyncResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_sync_labels_workflow(
    config: SyncLabelsConfig,
    reporter: SyncReporter | None = None,
    store: LabelStoreBase | None = None,
) -> SyncResult:
    """Run the sync-labels workflow: load the label file, reconcile it with the repository, report.

    Raises:
        FileNotFoundError: If the label configuration file does not exist.
        ConfigProcessingError: If the label configuration file is invalid.
        ConfigError: If no GitHub client can be built from the configured credentials.
    """
    reporter = reporter or create_reporter(verbose=config.debug)
    label_config = LabelConfigProcessor().load_label_config(config.config_path)
    reporter.info(f"Loaded {len(label_config.labels)} label(s) from {config.config_path}")

    if store is None:
        try:
            store = await GitHubKitAdapter.create(
                repo=config.repo,
                github_auth_type=config.github_authentication_type,
                github_pat_token=config.github_pat_token,
                github_app_id=config.github_app_id,
                github_app_private_key_path=config.github_app_private_key_path,
                github_app_installation_id=config.github_app_installation_id,
                github_api_url=config.github_api_url,
                dry_run=config.dry_run,
            )
        except (ValueError, RuntimeError) as exc:
            logger.error("Failed to create GitHub client", repo=config.repo, error=str(exc))
            raise ConfigError(str(exc)) from exc

    start_time = time.time()
    logger.info("Synchronizing labels", repo=config.repo, deletion_mode=config.deletion_mode.value, dry_run=config.dry_run)
    with reporter.group(f"Syncing labels for {config.repo}"):
        result = await sync_github_labels(
            label_config,
            store,
            reporter=reporter,
            deletion_mode=config.deletion_mode,
            dry_run=config.dry_run,
        )
    logger.info("Synchronized labels", repo=config.repo, duration=round(time.time() - start_time, 2), success=result.success)

    reporter.write_summary(result)
    if not result.success:
        reporter.set_failed(f"{result.summary.failed} label operation(s) failed")
    return result
