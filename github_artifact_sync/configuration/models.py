"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    TOKEN = "token"
    BASIC = "basic"


@dataclass(frozen=True)
class CredentialSet:
    """Raw credential values as supplied on the command line or environment."""

    token: str | None = None
    username: str | None = None
    password: str | None = None
    otp: str | None = None


@dataclass(frozen=True)
class GitHubCredentials:
    """Resolved authentication capability shared by git transport and the GitHub API client."""

    auth_type: GitHubAuthenticationType
    token: str | None = None
    username: str | None = None
    password: str | None = None
    otp: str | None = None

    def __repr__(self) -> str:
        return f"GitHubCredentials(auth_type={self.auth_type.value!r}, username={self.username!r})"


@dataclass(frozen=True)
class SyncRequest:
    """Immutable configuration for a single synchronization run.

    ``output_head`` and ``commit_message`` are always resolved by the time a
    request exists; ``commit_time`` of ``None`` means the wall clock at commit
    time is used.
    """

    input_path: Path
    output_repo: str
    output_repo_path: str
    output_base: str
    output_head: str
    commit_message: str
    commit_time: datetime | None
    credentials: GitHubCredentials
    pr_base: str | None = None
    merge_base: str | None = None
    pr_body: str = "Sync"
    github_api_url: str = "https://api.github.com"
