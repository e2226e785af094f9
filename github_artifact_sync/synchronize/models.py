"""Models describing the state and outcome of a synchronization run."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class BranchState:
    """A branch name and whether it existed in the local reference table when resolved."""

    name: str
    exists: bool
    commit_sha: str | None = None


@dataclass(frozen=True)
class AuthorIdentity:
    """Name and email recorded as both author and committer of the sync commit."""

    name: str
    email: str


@dataclass(frozen=True)
class CommitResult:
    """The commit produced by a synchronization run."""

    sha: str
    author: AuthorIdentity
    timestamp: datetime


@dataclass(frozen=True)
class SyncResult:
    """Outcome of the publish-content half of the workflow."""

    head: BranchState
    commit: CommitResult
    pushed_ref: str


class PublishDecision(str, Enum):
    """How the pushed head branch was reconciled with its target branch."""

    MERGED = "merged"
    PULL_REQUEST_CREATED = "pull-request-created"
    PULL_REQUEST_ALREADY_EXISTS = "pull-request-already-exists"
    NONE = "none"


@dataclass(frozen=True)
class PublishOutcome:
    """Terminal value of the reconciliation half of the workflow."""

    decision: PublishDecision
    url: str | None = None
    sha: str | None = None
    number: int | None = None
