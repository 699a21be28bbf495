"""Contains exceptions raised when reconciling application configuration."""


class GitHubAuthenticationConfigurationUndefinedError(Exception):
    """Raised when the GitHub authentication configuration is undefined."""

    pass


class ConfigError(Exception):
    """Raised when the CLI or environment configuration is missing or invalid."""

    def __init__(self, message: str, show_help: bool = False) -> None:
        """Initializes the exception, optionally asking the CLI to show usage."""
        super().__init__(message)
        self.show_help = show_help
