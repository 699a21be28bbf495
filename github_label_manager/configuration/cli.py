"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import json
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from github_label_manager.configuration.exceptions import ConfigError, GitHubAuthenticationConfigurationUndefinedError
from github_label_manager.configuration.models import DeletionMode
from github_label_manager.configuration.reconcile import reconcile_sync_labels_configuration
from github_label_manager.processing.exceptions import ConfigProcessingError
from github_label_manager.processing.yaml_processor import LabelConfigProcessor
from github_label_manager.schemas.labels import LabelConfigModel
from github_label_manager.synchronize.driver import run_sync_labels_workflow
from github_label_manager.utils.constants import DEFAULT_CONFIG_PATH
from github_label_manager.utils.log import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Synchronize GitHub repository labels from a YAML configuration file.")

CONFIG_ERROR_EXIT_CODE = 2


@typer_app.command(name="sync")
def sync_labels_cli(
    repo: Annotated[str | None, Argument(envvar="REPO", help="Repository name (owner/repo).")] = None,
    config_path: Annotated[
        Path | None,
        Option("--config", "-c", envvar="CONFIG_PATH", help=f"Path to the label configuration file. Defaults to {DEFAULT_CONFIG_PATH}."),
    ] = None,
    dry_run: Annotated[bool, Option("--dry-run", envvar="DRY_RUN", help="Report what would change without changing anything.")] = False,
    deletion_mode: Annotated[
        DeletionMode,
        Option(
            "--deletion-mode",
            envvar="DELETION_MODE",
            case_sensitive=False,
            help="'declarative' deletes labels missing from the file; 'explicit' deletes only those listed under 'delete'.",
        ),
    ] = DeletionMode.DECLARATIVE,
    output_json: Annotated[Path | None, Option("--output-json", help="Write the sync result as JSON to this path.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_pat_token: Annotated[
        str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token. Falls back to GITHUB_TOKEN.")
    ] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
) -> None:
    """Create, update, rename and delete labels in a repository to match the configuration file."""
    configure_logging(debug=debug)
    try:
        config = asyncio.run(
            reconcile_sync_labels_configuration(
                cli_repo=repo,
                cli_config_path=config_path,
                cli_github_api_url=github_api_url,
                cli_github_pat_token=github_pat_token,
                cli_github_app_id=github_app_id,
                cli_github_app_private_key_path=github_app_private_key_path,
                cli_github_app_installation_id=github_app_installation_id,
                cli_deletion_mode=deletion_mode,
                cli_dry_run=dry_run,
                cli_debug=debug,
            )
        )
    except (ConfigError, GitHubAuthenticationConfigurationUndefinedError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        if isinstance(exc, ConfigError) and exc.show_help:
            typer.echo("Run 'github-label-manager sync --help' for usage.", err=True)
        raise typer.Exit(CONFIG_ERROR_EXIT_CODE) from exc

    try:
        result = asyncio.run(run_sync_labels_workflow(config))
    except (FileNotFoundError, ConfigError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(CONFIG_ERROR_EXIT_CODE) from exc
    except ConfigProcessingError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(CONFIG_ERROR_EXIT_CODE) from exc

    if output_json is not None:
        output_json.write_text(json.dumps(result.to_dict(), indent=2) + "\n", encoding="utf-8")
        typer.echo(f"Wrote sync result to {output_json}")

    if not result.success:
        raise typer.Exit(1)


@typer_app.command(name="validate")
def validate_cli(
    config_path: Annotated[Path, Argument(envvar="CONFIG_PATH", help="Path to the label configuration file.")] = Path(DEFAULT_CONFIG_PATH),
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Validate a label configuration file without contacting GitHub."""
    configure_logging(debug=debug)
    try:
        label_config = LabelConfigProcessor().load_label_config(config_path)
    except FileNotFoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    except ConfigProcessingError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    alias_count = sum(len(label.aliases or []) for label in label_config.labels)
    typer.echo(f"{config_path} is valid: {len(label_config.labels)} label(s), {alias_count} alias(es)")
    if label_config.delete:
        typer.echo(f"  {len(label_config.delete)} label(s) listed under 'delete' (only used with --deletion-mode explicit)")
    if label_config.ignore:
        typer.echo(f"  ignore patterns: {', '.join(label_config.ignore)}")


@typer_app.command(name="schema")
def schema_cli(
    output_file: Annotated[Path | None, Option("--output", "-o", help="Write the schema to this path instead of stdout.")] = None,
) -> None:
    """Print the JSON schema of the label configuration file."""
    schema = json.dumps(LabelConfigModel.json_schema(), indent=2) + "\n"
    if output_file is None:
        typer.echo(schema, nl=False)
        return
    output_file.write_text(schema, encoding="utf-8")
    typer.echo(f"Wrote schema to {output_file}")


if __name__ == "__main__":
    typer_app()
