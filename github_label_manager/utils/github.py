"""Contains utility functions for GitHub interactions."""


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("Repository required. Usage: github-label-manager sync OWNER/REPO")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Invalid repository format. Expected: owner/repo")
    owner, repository = parts
    return owner, repository
