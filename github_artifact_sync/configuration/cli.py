"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from github_artifact_sync.configuration.config import Settings
from github_artifact_sync.configuration.models import CredentialSet
from github_artifact_sync.configuration.reconcile import build_sync_request
from github_artifact_sync.exceptions import SyncWorkflowError
from github_artifact_sync.synchronize.driver import run_sync_workflow
from github_artifact_sync.utils.constants import COMMIT_TIME_NOW
from github_artifact_sync.utils.logging import configure_logging

load_dotenv()

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


@typer_app.command(name="sync")
def sync_cli(
    output_repo: Annotated[str | None, Option("--output-repo", envvar="OUTPUT_REPO", help="Repository URL to write artifacts to.")] = None,
    message: Annotated[
        str | None,
        Option("--message", envvar="SYNC_MESSAGE", help="Commit message, defaults to 'Sync ${CI_PROJECT_NAME:-$PWD}/$CI_COMMIT_REF_NAME'."),
    ] = None,
    input_path: Annotated[Path, Option("--input-path", envvar="INPUT_PATH", help="Directory to read artifacts from.")] = Path("."),
    output_repo_path: Annotated[
        str, Option("--output-repo-path", envvar="OUTPUT_REPO_PATH", help="Subdirectory of the output repository to write artifacts to.")
    ] = ".",
    output_base: Annotated[str, Option("--output-base", envvar="OUTPUT_BASE", help="Branch to use as basis.")] = "develop",
    output_head: Annotated[
        str | None,
        Option("--output-head", envvar="OUTPUT_HEAD", help="Branch to write to and create a PR from into base; default is generated."),
    ] = None,
    pr_base: Annotated[
        str | None, Option("--pr", envvar="PR_BASE", help="Create a draft PR from the head branch into this base branch.")
    ] = None,
    merge_base: Annotated[
        str | None, Option("--merge", envvar="MERGE_BASE", help="Merge the head branch straight away into this base branch.")
    ] = None,
    pr_body: Annotated[str, Option("--pr-body", envvar="PR_BODY", help="Body of the PR.")] = "Sync",
    commit_timestamp: Annotated[
        str,
        Option(
            "--commit-timestamp",
            envvar="COMMIT_TIMESTAMP",
            help="Time of the commit in RFC3339 format, for example $CI_COMMIT_TIMESTAMP of the original commit.",
        ),
    ] = COMMIT_TIME_NOW,
    github_username: Annotated[str | None, Option("--github-username", envvar="GITHUB_USERNAME", help="GitHub username for basic auth.")] = None,
    github_password: Annotated[str | None, Option("--github-password", envvar="GITHUB_PASSWORD", help="GitHub password for basic auth.")] = None,
    github_otp: Annotated[str | None, Option("--github-otp", envvar="GITHUB_OTP", help="GitHub OTP for basic auth.")] = None,
    github_token: Annotated[str | None, Option("--github-token", envvar="GITHUB_TOKEN", help="GitHub token.")] = None,
    github_api_url: Annotated[str, Option("--github-api-url", envvar="GITHUB_API_URL", help="GitHub API URL.")] = "https://api.github.com",
    debug: Annotated[bool, Option("--debug", envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Mirror a directory into a branch of a GitHub repository, then optionally merge it or open a PR."""
    configure_logging(debug)
    credentials = CredentialSet(token=github_token, username=github_username, password=github_password, otp=github_otp)
    try:
        request = asyncio.run(
            build_sync_request(
                credentials=credentials,
                output_repo=output_repo,
                input_path=input_path,
                output_repo_path=output_repo_path,
                output_base=output_base,
                output_head=output_head,
                commit_message=message,
                commit_timestamp=commit_timestamp,
                pr_base=pr_base,
                merge_base=merge_base,
                pr_body=pr_body,
                github_api_url=github_api_url,
                settings=Settings(),
            )
        )
        result = asyncio.run(run_sync_workflow(request))
    except SyncWorkflowError as exc:
        logger.error("Sync failed", error=str(exc), error_type=type(exc).__name__)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    outcome = result.publish_outcome
    typer.echo(f"Pushed {result.sync_result.commit.sha} to {result.sync_result.pushed_ref}")
    if outcome.url:
        typer.echo(f"{outcome.decision.value}: {outcome.url}")
    else:
        typer.echo(outcome.decision.value)


if __name__ == "__main__":
    typer_app()
