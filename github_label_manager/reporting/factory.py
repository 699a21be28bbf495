"""Chooses the reporter appropriate for the current environment."""

from github_label_manager.configuration.env import get_settings
from github_label_manager.reporting.actions import ActionsReporter
from github_label_manager.reporting.base import SyncReporter
from github_label_manager.reporting.console import ConsoleReporter


def is_github_actions() -> bool:
    """Return True when running inside a GitHub Actions job."""
    return get_settings().GITHUB_ACTIONS


def create_reporter(verbose: bool = False) -> SyncReporter:
    """Create an Actions reporter inside GitHub Actions, a console reporter otherwise."""
    if is_github_actions():
        return ActionsReporter()
    return ConsoleReporter(verbose=verbose)
