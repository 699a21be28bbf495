"""Reconciles configuration between CLI arguments and environment variables."""

from pathlib import Path

from github_label_manager.configuration.env import Settings, get_settings
from github_label_manager.configuration.exceptions import ConfigError, GitHubAuthenticationConfigurationUndefinedError
from github_label_manager.configuration.models import DeletionMode, GitHubAuthenticationType, SyncLabelsConfig
from github_label_manager.utils.github import split_repository_in_configuration


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If neither or both configurations are defined,
            or the GitHub App configuration is incomplete.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    app_settings = {
        "GitHub App ID": ("github_app_id", "GITHUB_APP_ID", github_app_id),
        "GitHub App private key path": ("github_app_private_key_path", "GITHUB_APP_PRIVATE_KEY_PATH", github_app_private_key_path),
        "GitHub App installation ID": ("github_app_installation_id", "GITHUB_APP_INSTALLATION_ID", github_app_installation_id),
    }
    any_app_setting = any(value for _, _, value in app_settings.values())

    if github_pat_token and any_app_setting:
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if not any_app_setting:
        raise GitHubAuthenticationConfigurationUndefinedError(
            "No GitHub authentication configuration provided. Please provide either a PAT (GITHUB_PAT_TOKEN or GITHUB_TOKEN) "
            "or a GitHub App configuration."
        )

    missing = [
        f"{name} (command line option {cli_name}, environment variable {env_name})"
        for name, (cli_name, env_name, value) in app_settings.items()
        if not value
    ]
    if missing:
        raise GitHubAuthenticationConfigurationUndefinedError("Incomplete GitHub App configuration - missing settings include " + ", ".join(missing))
    return GitHubAuthenticationType.APP


async def reconcile_sync_labels_configuration(
    cli_repo: str | None,
    cli_config_path: Path | None = None,
    cli_github_api_url: str | None = None,
    cli_github_pat_token: str | None = None,
    cli_github_app_id: int | None = None,
    cli_github_app_private_key_path: Path | None = None,
    cli_github_app_installation_id: int | None = None,
    cli_deletion_mode: DeletionMode = DeletionMode.DECLARATIVE,
    cli_dry_run: bool = False,
    cli_debug: bool = False,
    settings: Settings | None = None,
) -> SyncLabelsConfig:
    """Merge CLI arguments with environment settings into a validated sync configuration.

    CLI arguments take precedence over environment variables, which take
    precedence over defaults.

    Raises:
        ConfigError: If the repository is missing or malformed.
        GitHubAuthenticationConfigurationUndefinedError: If authentication is not configured correctly.
    """
    settings = settings or get_settings()

    repo = cli_repo or settings.REPO
    if not repo:
        raise ConfigError("Repository required. Usage: github-label-manager sync OWNER/REPO", show_help=True)
    try:
        await split_repository_in_configuration(repo)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    github_pat_token = cli_github_pat_token or settings.github_token
    github_app_id = cli_github_app_id or settings.GITHUB_APP_ID
    github_app_private_key_path = cli_github_app_private_key_path or settings.GITHUB_APP_PRIVATE_KEY_PATH
    github_app_installation_id = cli_github_app_installation_id or settings.GITHUB_APP_INSTALLATION_ID

    auth_type = await validate_github_authentication_configuration(
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )

    return SyncLabelsConfig(
        repo=repo,
        config_path=cli_config_path or settings.CONFIG_PATH,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_authentication_type=auth_type,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
        deletion_mode=cli_deletion_mode,
        dry_run=cli_dry_run or settings.DRY_RUN,
        debug=cli_debug or settings.DEBUG,
    )
