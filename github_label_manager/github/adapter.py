"""Label store adapter for the githubkit library."""

from functools import wraps
from pathlib import Path
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.v2022_11_28.models import Label

from github_label_manager.configuration.models import GitHubAuthenticationType
from github_label_manager.schemas.labels import RemoteLabel
from github_label_manager.utils.constants import LABELS_PER_PAGE
from github_label_manager.utils.github import split_repository_in_configuration
from github_label_manager.utils.retry import retry_on_rate_limit

from .abc import LabelStoreBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging them with details.

    The original RequestFailed is re-raised so that callers keep access to the
    response status when formatting the failure.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except Exception:
                    error_data = {}
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=error_data.get("message", "Unprocessable Entity"),
                    errors=error_data.get("errors", []),
                    url=str(getattr(exc.response, "url", "")),
                    status_code=422,
                )
            raise

    return wrapper  # type: ignore


def to_remote_label(label: Label) -> RemoteLabel:
    """Convert a githubkit label model into a RemoteLabel."""
    return RemoteLabel(name=label.name, color=label.color, description=label.description)


class GitHubKitAdapter(LabelStoreBase):
    """Label store backed by the GitHub REST API through githubkit."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str, dry_run: bool = False) -> None:
        """Initialize the adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name
        self.dry_run = dry_run

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @staticmethod
    def _clean_color(color: str | None) -> str | None:
        return color.removeprefix("#") if color else None

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = "https://api.github.com",
        dry_run: bool = False,
    ) -> Self:
        """Create a new label store adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_auth_type: Type of authentication (PAT or APP)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_app_installation_id: Installation ID (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)
            dry_run: Skip every mutating call and return None instead

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is malformed
            RuntimeError: If required parameters for the chosen auth type are missing
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
            dry_run=dry_run,
        )
        client = await get_github_client(
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
        )
        return cls(client, owner, repo_name, dry_run=dry_run)

    @retry_on_rate_limit()
    async def list_labels(self) -> list[RemoteLabel]:
        """List all labels for the repository, handling pagination."""
        all_labels: list[RemoteLabel] = []
        page: int = 1
        while True:
            response: Response[list[Label]] = await self.client.rest.issues.async_list_labels_for_repo(
                owner=self.owner,
                repo=self.repo_name,
                per_page=LABELS_PER_PAGE,
                page=page,
            )
            labels = response.parsed_data
            all_labels.extend(to_remote_label(label) for label in labels)
            if len(labels) < LABELS_PER_PAGE:
                break
            page += 1
        logger.debug("Listed labels", owner=self.owner, repo_name=self.repo_name, label_count=len(all_labels), pages=page)
        return all_labels

    @retry_on_rate_limit()
    async def get_label(self, name: str) -> RemoteLabel | None:
        """Get a single label by name, returning None if it does not exist."""
        try:
            response: Response[Label] = await self.client.rest.issues.async_get_label(owner=self.owner, repo=self.repo_name, name=name)
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                return None
            raise
        return to_remote_label(response.parsed_data)

    @handle_github_422
    @retry_on_rate_limit()
    async def create_label(self, name: str, color: str | None = None, description: str | None = None) -> RemoteLabel | None:
        """Create a label for the repository."""
        if self.dry_run:
            logger.debug("Dry run, skipping label creation", label_name=name)
            return None
        params = self._omit_null_parameters(name=name, color=self._clean_color(color), description=description)
        response: Response[Label] = await self.client.rest.issues.async_create_label(
            owner=self.owner,
            repo=self.repo_name,
            **params,
        )
        return to_remote_label(response.parsed_data)

    @handle_github_422
    @retry_on_rate_limit()
    async def update_label(
        self,
        name: str,
        new_name: str | None = None,
        color: str | None = None,
        description: str | None = None,
    ) -> RemoteLabel | None:
        """Update a label for the repository."""
        if self.dry_run:
            logger.debug("Dry run, skipping label update", label_name=name, new_label_name=new_name)
            return None
        params = self._omit_null_parameters(new_name=new_name, color=self._clean_color(color), description=description)
        response: Response[Label] = await self.client.rest.issues.async_update_label(
            owner=self.owner,
            repo=self.repo_name,
            name=name,
            **params,
        )
        return to_remote_label(response.parsed_data)

    @retry_on_rate_limit()
    async def delete_label(self, name: str) -> None:
        """Delete a label from the repository."""
        if self.dry_run:
            logger.debug("Dry run, skipping label deletion", label_name=name)
            return None
        await self.client.rest.issues.async_delete_label(owner=self.owner, repo=self.repo_name, name=name)
        return None
