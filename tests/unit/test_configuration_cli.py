"""Unit tests for the Typer command line interface."""

import json
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pytest import MonkeyPatch
from typer.testing import CliRunner

from github_label_manager.configuration.cli import typer_app
from github_label_manager.configuration.models import DeletionMode, SyncLabelsConfig
from github_label_manager.processing.exceptions import ConfigProcessingError
from github_label_manager.synchronize.models import OperationType, SyncOperation
from github_label_manager.synchronize.results import SyncResult

runner = CliRunner()

ENVIRONMENT_VARIABLES = [
    "REPO",
    "CONFIG_PATH",
    "DRY_RUN",
    "DEBUG",
    "DELETION_MODE",
    "GITHUB_API_URL",
    "GITHUB_PAT_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_APP_ID",
    "GITHUB_APP_PRIVATE_KEY_PATH",
    "GITHUB_APP_INSTALLATION_ID",
]

LABELS_YAML = """\
labels:
  - name: bug
    color: "d73a4a"
    aliases: [defect]
  - name: feature
ignore: ["dependabot*"]
"""


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: MonkeyPatch) -> Generator[MagicMock, None, None]:
    """Clear configuration environment variables and keep logging configuration untouched."""
    for name in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    with patch("github_label_manager.configuration.cli.configure_logging") as configure_logging:
        yield configure_logging


def test_schema_prints_json_schema() -> None:
    """Test that the schema command prints the configuration JSON schema."""
    result = runner.invoke(typer_app, ["schema"])
    assert result.exit_code == 0
    schema = json.loads(result.output)
    assert set(schema["properties"]) == {"labels", "ignore", "delete"}


def test_schema_writes_file(tmp_path: Path) -> None:
    """Test that the schema can be written to a file."""
    output = tmp_path / "labels.schema.json"
    result = runner.invoke(typer_app, ["schema", "--output", str(output)])
    assert result.exit_code == 0
    assert "labels" in json.loads(output.read_text(encoding="utf-8"))["properties"]


def test_validate_valid_file(tmp_path: Path) -> None:
    """Test that a valid configuration passes validation."""
    path = tmp_path / "labels.yml"
    path.write_text(LABELS_YAML, encoding="utf-8")

    result = runner.invoke(typer_app, ["validate", str(path)])

    assert result.exit_code == 0
    assert f"{path} is valid: 2 label(s), 1 alias(es)" in result.output
    assert "ignore patterns: dependabot*" in result.output


def test_validate_invalid_file(tmp_path: Path) -> None:
    """Test that validation errors exit with status 1."""
    path = tmp_path / "labels.yml"
    path.write_text('labels:\n  - name: bug\n    color: "nope"\n', encoding="utf-8")

    result = runner.invoke(typer_app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Invalid hex color" in result.output


def test_validate_missing_file(tmp_path: Path) -> None:
    """Test that a missing file exits with status 1."""
    result = runner.invoke(typer_app, ["validate", str(tmp_path / "missing.yml")])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_sync_requires_repository() -> None:
    """Test that sync without a repository is a configuration error."""
    result = runner.invoke(typer_app, ["sync", "--github-pat-token", "token"])
    assert result.exit_code == 2
    assert "Repository required" in result.output


def test_sync_rejects_malformed_repository() -> None:
    """Test that a malformed repository is a configuration error."""
    result = runner.invoke(typer_app, ["sync", "not-a-repo", "--github-pat-token", "token"])
    assert result.exit_code == 2
    assert "Invalid repository format. Expected: owner/repo" in result.output


def test_sync_requires_authentication() -> None:
    """Test that sync without credentials is a configuration error."""
    result = runner.invoke(typer_app, ["sync", "owner/repo"])
    assert result.exit_code == 2
    assert "No GitHub authentication configuration provided" in result.output


def test_sync_success_writes_json(tmp_path: Path) -> None:
    """Test a successful sync with JSON output and the options passed through."""
    output = tmp_path / "result.json"
    sync_result = SyncResult([SyncOperation(OperationType.CREATE, "bug", True)])

    with patch("github_label_manager.configuration.cli.run_sync_labels_workflow", new_callable=AsyncMock, return_value=sync_result) as run:
        result = runner.invoke(
            typer_app,
            [
                "sync",
                "owner/repo",
                "--github-pat-token",
                "token",
                "--config",
                "labels.yml",
                "--dry-run",
                "--deletion-mode",
                "explicit",
                "--output-json",
                str(output),
            ],
        )

    assert result.exit_code == 0
    config: SyncLabelsConfig = run.await_args.args[0]
    assert config.repo == "owner/repo"
    assert config.config_path == Path("labels.yml")
    assert config.dry_run is True
    assert config.deletion_mode == DeletionMode.EXPLICIT
    assert json.loads(output.read_text(encoding="utf-8")) == sync_result.to_dict()


def test_sync_reads_environment(monkeypatch: MonkeyPatch) -> None:
    """Test that the repository and GITHUB_TOKEN can come from the environment."""
    monkeypatch.setenv("REPO", "owner/repo")
    monkeypatch.setenv("GITHUB_TOKEN", "actions-token")

    with patch("github_label_manager.configuration.cli.run_sync_labels_workflow", new_callable=AsyncMock, return_value=SyncResult([])) as run:
        result = runner.invoke(typer_app, ["sync"])

    assert result.exit_code == 0
    config: SyncLabelsConfig = run.await_args.args[0]
    assert config.repo == "owner/repo"
    assert config.github_pat_token == "actions-token"
    assert config.deletion_mode == DeletionMode.DECLARATIVE


def test_sync_failure_exits_with_one() -> None:
    """Test that a run with failed operations exits with status 1."""
    failed = SyncResult([SyncOperation(OperationType.SKIP, "*", False, error="Failed to fetch existing labels")])
    with patch("github_label_manager.configuration.cli.run_sync_labels_workflow", new_callable=AsyncMock, return_value=failed):
        result = runner.invoke(typer_app, ["sync", "owner/repo", "--github-pat-token", "token"])
    assert result.exit_code == 1


def test_sync_invalid_configuration_exits_with_two() -> None:
    """Test that an invalid label file exits with status 2."""
    error = ConfigProcessingError([{"file": "labels.yml", "error": "Missing top-level 'labels' key"}])
    with patch("github_label_manager.configuration.cli.run_sync_labels_workflow", new_callable=AsyncMock, side_effect=error):
        result = runner.invoke(typer_app, ["sync", "owner/repo", "--github-pat-token", "token"])
    assert result.exit_code == 2
    assert "Missing top-level 'labels' key" in result.output


def test_sync_unreadable_app_private_key_exits_with_two(tmp_path: Path) -> None:
    """Test that a GitHub App private key that cannot be read is a configuration error."""
    path = tmp_path / "labels.yml"
    path.write_text(LABELS_YAML, encoding="utf-8")
    missing_key = tmp_path / "missing.pem"

    result = runner.invoke(
        typer_app,
        [
            "sync",
            "owner/repo",
            "--config",
            str(path),
            "--github-app-id",
            "1",
            "--github-app-installation-id",
            "2",
            "--github-app-private-key-path",
            str(missing_key),
        ],
    )

    assert result.exit_code == 2
    assert "Error: Failed to read GitHub App private key" in result.output
    assert not isinstance(result.exception, ValueError)


def test_sync_configures_debug_logging(isolated_environment: MagicMock) -> None:
    """Test that --debug turns on debug logging."""
    with patch("github_label_manager.configuration.cli.run_sync_labels_workflow", new_callable=AsyncMock, return_value=SyncResult([])):
        runner.invoke(typer_app, ["sync", "owner/repo", "--github-pat-token", "token", "--debug"])
    isolated_environment.assert_called_once_with(debug=True)
