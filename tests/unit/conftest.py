"""Fixtures for unit tests."""

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
import structlog

from github_artifact_sync.configuration.models import GitHubAuthenticationType, GitHubCredentials, SyncRequest
from github_artifact_sync.exceptions import FetchError, FetchFailureKind, GitStateError
from github_artifact_sync.git.abc import GitBackendBase
from github_artifact_sync.synchronize.models import AuthorIdentity


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


class FakeGitBackend(GitBackendBase):
    """In-memory git backend recording the operations the workflow performs."""

    def __init__(
        self,
        workspace: Path,
        remote_branches: dict[str, str] | None = None,
        fetch_failure: FetchFailureKind | None = None,
        clone_error: Exception | None = None,
    ) -> None:
        self.workspace = workspace
        self.remote_branches = dict(remote_branches or {})
        self.local_branches: dict[str, str] = {}
        self.fetch_failure = fetch_failure
        self.clone_error = clone_error
        self.calls: list[tuple[object, ...]] = []
        self.checked_out: str | None = None
        self.commits: list[tuple[str, AuthorIdentity, datetime, str | None]] = []
        self.pushed: dict[str, str] = {}
        self.staged_changes = True

    @property
    def working_tree_dir(self) -> Path:
        return self.workspace

    def clone(self, url: str, branch: str, depth: int) -> None:
        self.calls.append(("clone", url, branch, depth))
        if self.clone_error is not None:
            raise self.clone_error
        self.workspace.mkdir(parents=True, exist_ok=True)
        if branch in self.remote_branches:
            self.local_branches[branch] = self.remote_branches[branch]
            self.checked_out = branch

    def fetch(self, refspec: str, depth: int) -> None:
        self.calls.append(("fetch", refspec, depth))
        if self.fetch_failure is not None:
            raise FetchError("fetch failed", kind=self.fetch_failure, context="fetching pre-existing head")
        branch = refspec.split(":", 1)[0].removeprefix("refs/heads/")
        if branch in self.remote_branches:
            self.local_branches[branch] = self.remote_branches[branch]
        else:
            raise FetchError("couldn't find remote ref", kind=FetchFailureKind.NO_MATCHING_REF)

    def resolve_reference(self, branch: str) -> str | None:
        self.calls.append(("resolve_reference", branch))
        return self.local_branches.get(branch)

    def checkout(self, branch: str, create: bool = False, start_point: str | None = None) -> None:
        self.calls.append(("checkout", branch, create, start_point))
        if create:
            self.local_branches[branch] = start_point or ""
        elif branch not in self.local_branches:
            raise GitStateError(f"pathspec {branch!r} did not match", context="worktree checkout existing head branch")
        self.checked_out = branch

    def stage(self, path: str) -> None:
        self.calls.append(("stage", path))

    def status(self) -> str:
        return "A  a.txt"

    def has_staged_changes(self) -> bool:
        return self.staged_changes

    def commit(self, message: str, author: AuthorIdentity, when: datetime) -> str:
        self.calls.append(("commit", message))
        assert self.checked_out is not None
        parent = self.local_branches.get(self.checked_out)
        sha = f"{len(self.commits) + 1:040x}"
        self.commits.append((message, author, when, parent))
        return sha

    def set_reference(self, branch: str, sha: str) -> None:
        self.calls.append(("set_reference", branch, sha))
        self.local_branches[branch] = sha

    def push(self, refspec: str, force: bool = False) -> None:
        self.calls.append(("push", refspec, force))
        source, destination = refspec.split(":", 1)
        self.pushed[destination] = self.local_branches[source.removeprefix("refs/heads/")]
        self.remote_branches[destination.removeprefix("refs/heads/")] = self.pushed[destination]

    def call_names(self) -> list[object]:
        return [call[0] for call in self.calls]


@pytest.fixture
def token_credentials() -> GitHubCredentials:
    """Token credentials used by requests built in tests."""
    return GitHubCredentials(auth_type=GitHubAuthenticationType.TOKEN, token="ghp_secret")


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    """An input artifact directory containing a.txt and b.txt."""
    directory = tmp_path / "input"
    directory.mkdir()
    (directory / "a.txt").write_text("a\n")
    (directory / "b.txt").write_text("b\n")
    return directory


@pytest.fixture
def sync_request(input_dir: Path, token_credentials: GitHubCredentials) -> SyncRequest:
    """A request syncing input_dir into the 'artifacts' subdirectory of myorg/myrepo."""
    return SyncRequest(
        input_path=input_dir,
        output_repo="https://github.com/myorg/myrepo.git",
        output_repo_path="artifacts",
        output_base="develop",
        output_head="auto/sync/20240102T150405Z",
        commit_message="Sync project/main",
        commit_time=None,
        credentials=token_credentials,
    )


@pytest.fixture
def fake_git_backend(tmp_path: Path) -> FakeGitBackend:
    """A fake backend whose remote has 'develop' but no head branch yet."""
    return FakeGitBackend(tmp_path / "clone", remote_branches={"develop": "d" * 40})


@pytest.fixture
def make_git_backend(tmp_path: Path) -> Callable[..., FakeGitBackend]:
    """Factory for fake backends with custom remote state."""

    def factory(**kwargs: Any) -> FakeGitBackend:
        kwargs.setdefault("remote_branches", {"develop": "d" * 40})
        return FakeGitBackend(tmp_path / "clone", **kwargs)

    return factory
