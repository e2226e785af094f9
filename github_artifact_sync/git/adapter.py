"""Git backend adapter for the GitPython library."""

import re
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

import structlog
from git import GitCommandError, Repo

from github_artifact_sync.configuration.models import GitHubCredentials
from github_artifact_sync.exceptions import FetchError, FetchFailureKind, GitStateError, NetworkError
from github_artifact_sync.synchronize.models import AuthorIdentity
from github_artifact_sync.utils.github import authenticate_url, mask_url

from .abc import GitBackendBase

logger = structlog.get_logger(__name__)

URL_USERINFO_PASSWORD = re.compile(r"(://[^:/@\s]+):[^@\s/]+@")


def classify_fetch_failure(stderr: str) -> FetchFailureKind:
    """Classify git fetch stderr output into a fetch failure kind."""
    lowered = stderr.lower()
    if "couldn't find remote ref" in lowered or "could not find remote ref" in lowered:
        return FetchFailureKind.NO_MATCHING_REF
    if "up to date" in lowered or "up-to-date" in lowered:
        return FetchFailureKind.ALREADY_UP_TO_DATE
    return FetchFailureKind.OTHER


class GitPythonBackend(GitBackendBase):
    """Runs git operations through GitPython in a temporary clone.

    Use as a context manager so the temporary clone is removed::

        with GitPythonBackend(credentials) as backend:
            backend.clone(url, "develop", depth=1)
    """

    def __init__(self, credentials: GitHubCredentials, workspace: Path | None = None) -> None:
        """Initialize the backend; the clone lands in workspace, or a fresh temporary directory."""
        self.credentials = credentials
        self._owns_workspace = workspace is None
        self.workspace = workspace or Path(tempfile.mkdtemp(prefix="artifact_sync_"))
        self._repo: Repo | None = None

    def __enter__(self) -> "GitPythonBackend":
        return self

    def __exit__(self, *exc: object) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        """Remove the temporary clone directory, if this backend created it."""
        if self._owns_workspace and self.workspace.exists():
            shutil.rmtree(self.workspace, ignore_errors=True)

    @property
    def repo(self) -> Repo:
        if self._repo is None:
            raise GitStateError("repository has not been cloned yet", context="worktree")
        return self._repo

    @property
    def working_tree_dir(self) -> Path:
        return Path(str(self.repo.working_tree_dir))

    def _redact(self, text: str) -> str:
        """Mask credentials embedded in URL userinfo before git output is logged or raised."""
        return URL_USERINFO_PASSWORD.sub(r"\1:masked@", text)

    @staticmethod
    def _output(exc: GitCommandError) -> str:
        stderr = str(exc.stderr or "").strip()
        return stderr or str(exc)

    def _describe(self, exc: GitCommandError) -> str:
        return self._redact(self._output(exc))

    def clone(self, url: str, branch: str, depth: int) -> None:
        logger.info("Cloning repository", url=mask_url(url), branch=branch, depth=depth)
        try:
            self._repo = Repo.clone_from(
                authenticate_url(url, self.credentials),
                self.workspace,
                branch=branch,
                depth=depth,
                single_branch=True,
            )
        except GitCommandError as exc:
            detail = self._describe(exc)
            if "not found in upstream" in self._output(exc).lower():
                raise GitStateError(
                    f"base branch {branch!r} does not exist, check your inputs ({detail})", context="cloning"
                ) from exc
            raise NetworkError(detail, context="cloning") from exc

    def fetch(self, refspec: str, depth: int) -> None:
        logger.info("Fetching reference", refspec=refspec, depth=depth)
        try:
            self.repo.git.fetch("origin", refspec, f"--depth={depth}")
        except GitCommandError as exc:
            kind = classify_fetch_failure(self._output(exc))
            raise FetchError(self._describe(exc), kind=kind, context="fetching pre-existing head") from exc

    def resolve_reference(self, branch: str) -> str | None:
        try:
            return self.repo.git.rev_parse("--verify", "--quiet", f"refs/heads/{branch}^{{commit}}").strip() or None
        except GitCommandError:
            return None

    def checkout(self, branch: str, create: bool = False, start_point: str | None = None) -> None:
        try:
            if create:
                args = ["-b", branch] + ([start_point] if start_point else [])
                self.repo.git.checkout(*args)
            else:
                self.repo.git.checkout(branch)
        except GitCommandError as exc:
            context = "worktree checkout head branch" if create else "worktree checkout existing head branch"
            raise GitStateError(self._describe(exc), context=context) from exc

    def stage(self, path: str) -> None:
        try:
            self.repo.git.add("-A", "--force", "--", path)
        except GitCommandError as exc:
            raise GitStateError(self._describe(exc), context="staging changes") from exc

    def status(self) -> str:
        return self.repo.git.status("--short")

    def has_staged_changes(self) -> bool:
        return bool(self.repo.git.diff("--cached", "--name-only").strip())

    def commit(self, message: str, author: AuthorIdentity, when: datetime) -> str:
        date = when.isoformat(timespec="seconds")
        env = {
            "GIT_AUTHOR_NAME": author.name,
            "GIT_AUTHOR_EMAIL": author.email,
            "GIT_AUTHOR_DATE": date,
            "GIT_COMMITTER_NAME": author.name,
            "GIT_COMMITTER_EMAIL": author.email,
            "GIT_COMMITTER_DATE": date,
        }
        try:
            self.repo.git.commit("--allow-empty", "--no-verify", "-m", message, env=env)
        except GitCommandError as exc:
            raise GitStateError(self._describe(exc), context="committing") from exc
        return self.repo.head.commit.hexsha

    def set_reference(self, branch: str, sha: str) -> None:
        try:
            self.repo.git.update_ref(f"refs/heads/{branch}", sha)
        except GitCommandError as exc:
            raise GitStateError(self._describe(exc), context="creating ref") from exc

    def push(self, refspec: str, force: bool = False) -> None:
        args = ["--force"] if force else []
        try:
            self.repo.git.push(*args, "origin", refspec)
        except GitCommandError as exc:
            raise NetworkError(self._describe(exc), context="pushing") from exc
