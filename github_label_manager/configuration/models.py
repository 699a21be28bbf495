"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"


class DeletionMode(str, Enum):
    """How the reconciliation engine decides which remote labels to delete.

    DECLARATIVE deletes every remote label that is neither desired, an alias of
    a desired label, nor matched by an ignore pattern. EXPLICIT deletes only the
    names listed under 'delete' in the configuration file.
    """

    DECLARATIVE = "declarative"
    EXPLICIT = "explicit"


@dataclass
class SyncLabelsConfig:
    """Resolved configuration for the sync command."""

    repo: str
    config_path: Path
    github_api_url: str
    github_authentication_type: GitHubAuthenticationType
    github_pat_token: str | None
    github_app_id: int | None
    github_app_private_key_path: Path | None
    github_app_installation_id: int | None
    deletion_mode: DeletionMode = DeletionMode.DECLARATIVE
    dry_run: bool = False
    debug: bool = False
