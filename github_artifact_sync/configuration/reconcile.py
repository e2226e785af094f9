"""Reconciles configuration between CLI arguments and environment variables."""

from datetime import datetime
from pathlib import Path

from github_artifact_sync.configuration.config import Settings
from github_artifact_sync.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    RequiredConfigurationElementError,
)
from github_artifact_sync.configuration.models import (
    CredentialSet,
    GitHubAuthenticationType,
    GitHubCredentials,
    SyncRequest,
)
from github_artifact_sync.exceptions import ConfigError, InputError
from github_artifact_sync.utils.constants import COMMIT_TIME_NOW, DEFAULT_REF_NAME, RFC3339_PATTERN
from github_artifact_sync.utils.github import parse_github_repository_url
from github_artifact_sync.utils.helpers import generate_head_branch_name


async def validate_github_authentication_configuration(credentials: CredentialSet) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        credentials (CredentialSet): The raw token and username/password/OTP values.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If neither scheme is fully
            specified, or if both are.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    basic_values = (credentials.username, credentials.password, credentials.otp)
    if credentials.token and any(basic_values):
        raise GitHubAuthenticationConfigurationUndefinedError(
            "Both token and username/password configurations are defined. Please use one or the other."
        )

    if credentials.token:
        return GitHubAuthenticationType.TOKEN

    if credentials.username and credentials.password:
        return GitHubAuthenticationType.BASIC
    elif any(basic_values):
        missing_settings: list[dict[str, str]] = []
        if not credentials.username:
            missing_settings.append(
                {
                    "name": "GitHub username",
                    "cli_name": "--github-username",
                    "env_name": "GITHUB_USERNAME",
                }
            )
        if not credentials.password:
            missing_settings.append(
                {
                    "name": "GitHub password",
                    "cli_name": "--github-password",
                    "env_name": "GITHUB_PASSWORD",
                }
            )
        msg = "Incomplete GitHub username/password configuration - missing settings include " + ", ".join(
            f"{setting['name']} (command line option {setting['cli_name']}, environment variable {setting['env_name']})"
            for setting in missing_settings
        )
        raise GitHubAuthenticationConfigurationUndefinedError(msg)
    else:
        raise GitHubAuthenticationConfigurationUndefinedError(
            "No GitHub authentication configuration provided. Please provide either a token or a username and password."
        )


async def resolve_github_credentials(credentials: CredentialSet) -> GitHubCredentials:
    """Resolves raw credential values into the single authentication capability used by the run."""
    auth_type = await validate_github_authentication_configuration(credentials)
    if auth_type == GitHubAuthenticationType.TOKEN:
        return GitHubCredentials(auth_type=auth_type, token=credentials.token)
    return GitHubCredentials(
        auth_type=auth_type,
        username=credentials.username,
        password=credentials.password,
        otp=credentials.otp or None,
    )


def parse_commit_timestamp(value: str | None) -> datetime | None:
    """Parses the commit timestamp option.

    Returns ``None`` for the ``now`` sentinel (or an empty value), meaning the
    wall clock is read at commit time.

    Raises:
        InputError: If the value is not an RFC 3339 date-time with an offset.
    """
    if not value or value == COMMIT_TIME_NOW:
        return None
    if not RFC3339_PATTERN.match(value):
        raise InputError(f"{value!r} is not a valid date-time", context="parsing commit time with RFC3339/ISO8601 format")
    try:
        return datetime.fromisoformat(value.replace("z", "Z"))
    except ValueError as exc:
        raise InputError(str(exc), context="parsing commit time with RFC3339/ISO8601 format") from exc


def derive_commit_message(project_name: str | None, ref_name: str | None, cwd: Path | None = None) -> str:
    """Derive the default commit message 'Sync <project>/<ref>' from pipeline identifiers."""
    project = project_name or (cwd or Path.cwd()).name
    ref = ref_name or DEFAULT_REF_NAME
    return f"Sync {project}/{ref}"


async def build_sync_request(
    credentials: CredentialSet,
    output_repo: str | None,
    input_path: Path = Path("."),
    output_repo_path: str = ".",
    output_base: str = "develop",
    output_head: str | None = None,
    commit_message: str | None = None,
    commit_timestamp: str | None = COMMIT_TIME_NOW,
    pr_base: str | None = None,
    merge_base: str | None = None,
    pr_body: str = "Sync",
    github_api_url: str = "https://api.github.com",
    settings: Settings | None = None,
    now: datetime | None = None,
) -> SyncRequest:
    """Validates all inputs and builds the immutable request for one run.

    Every check that does not need the network happens here, so malformed
    input fails before anything is cloned.

    Raises:
        ConfigError: If the output repository, base branch, or credentials are
            missing or invalid, or if both a merge base and a PR base are given.
        InputError: If the commit timestamp cannot be parsed.
    """
    settings = settings or Settings()

    if not output_repo:
        raise RequiredConfigurationElementError("output repository", "--output-repo", "OUTPUT_REPO")
    parse_github_repository_url(output_repo)

    if not output_base:
        raise RequiredConfigurationElementError("output base branch", "--output-base", "OUTPUT_BASE")

    if pr_base and merge_base:
        raise ConfigError(
            f"both a merge base ({merge_base!r}) and a pull request base ({pr_base!r}) are set; choose one",
            context="validating publish options",
        )

    resolved_credentials = await resolve_github_credentials(credentials)
    commit_time = parse_commit_timestamp(commit_timestamp)

    return SyncRequest(
        input_path=input_path,
        output_repo=output_repo,
        output_repo_path=output_repo_path or ".",
        output_base=output_base,
        output_head=output_head or generate_head_branch_name(now),
        commit_message=commit_message or derive_commit_message(settings.CI_PROJECT_NAME, settings.CI_COMMIT_REF_NAME),
        commit_time=commit_time,
        credentials=resolved_credentials,
        pr_base=pr_base or None,
        merge_base=merge_base or None,
        pr_body=pr_body,
        github_api_url=github_api_url,
    )
