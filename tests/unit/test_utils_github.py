"""Contains unit tests for the utils.github module."""

import pytest

from github_label_manager.utils.github import split_repository_in_configuration


@pytest.mark.asyncio
async def test_split_repository_valid() -> None:
    """Test splitting a valid owner/repo string."""
    owner, repo = await split_repository_in_configuration("octocat/Hello-World")
    assert owner == "octocat"
    assert repo == "Hello-World"


@pytest.mark.asyncio
async def test_split_repository_strips_surrounding_slashes() -> None:
    """Test that leading and trailing slashes are tolerated."""
    assert await split_repository_in_configuration("/octocat/Hello-World/") == ("octocat", "Hello-World")


@pytest.mark.asyncio
async def test_split_repository_missing() -> None:
    """Test that ValueError is raised if repo is None."""
    with pytest.raises(ValueError, match="Repository required"):
        await split_repository_in_configuration(None)


@pytest.mark.asyncio
@pytest.mark.parametrize("repo", ["octocat-HelloWorld", "octocat/Hello/World", "octocat//Hello", ""])
async def test_split_repository_malformed(repo: str) -> None:
    """Test that ValueError is raised if repo is not owner/repo."""
    with pytest.raises(ValueError, match="Invalid repository format. Expected: owner/repo"):
        await split_repository_in_configuration(repo)
