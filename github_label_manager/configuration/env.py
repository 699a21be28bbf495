"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from github_label_manager.utils.constants import DEFAULT_CONFIG_PATH


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False
    DRY_RUN: bool = False
    CONFIG_PATH: Path = Path(DEFAULT_CONFIG_PATH)

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"
    REPO: str | None = None

    # GitHub PAT settings. GITHUB_TOKEN is what GitHub Actions provides.
    GITHUB_PAT_TOKEN: str | None = None
    GITHUB_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None
    GITHUB_APP_INSTALLATION_ID: int | None = None

    # Set to "true" by GitHub Actions runners
    GITHUB_ACTIONS: bool = False

    @property
    def github_token(self) -> str | None:
        """The PAT to authenticate with, preferring GITHUB_PAT_TOKEN over GITHUB_TOKEN."""
        return self.GITHUB_PAT_TOKEN or self.GITHUB_TOKEN


def get_settings() -> Settings:
    """Load settings from the environment and any .env file."""
    return Settings()
