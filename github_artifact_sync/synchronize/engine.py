"""Contains the core logic for mirroring artifacts into a branch and publishing it."""

from datetime import datetime, timezone
from typing import Any, Callable

import structlog
from structlog.contextvars import bound_contextvars

from github_artifact_sync.configuration.models import SyncRequest
from github_artifact_sync.exceptions import FetchError, GitStateError, is_benign_fetch_failure
from github_artifact_sync.git.abc import GitBackendBase
from github_artifact_sync.synchronize.content import replace_directory_contents
from github_artifact_sync.synchronize.models import AuthorIdentity, BranchState, CommitResult, SyncResult
from github_artifact_sync.utils.constants import CLONE_DEPTH
from github_artifact_sync.utils.github import author_email_for_user, mask_url

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    """Return the current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def branch_ref(branch: str) -> str:
    """Return the full reference name of a branch."""
    return f"refs/heads/{branch}"


def author_identity_from_user(user: Any) -> AuthorIdentity:
    """Build the commit author from the authenticated GitHub user."""
    login: str = user.login
    email = getattr(user, "email", None)
    return AuthorIdentity(name=login, email=author_email_for_user(login, email if isinstance(email, str) else None))


async def fetch_head_branch(backend: GitBackendBase, head: str) -> None:
    """Fetch the head branch, tolerating a head that is current or does not exist yet."""
    refspec = f"{branch_ref(head)}:{branch_ref(head)}"
    try:
        backend.fetch(refspec, CLONE_DEPTH)
    except FetchError as exc:
        if not is_benign_fetch_failure(exc):
            raise
        logger.info("Pre-existing head branch not fetched", head=head, reason=exc.kind.value)


async def resolve_head_branch(backend: GitBackendBase, head: str, base: str) -> BranchState:
    """Check out the head branch, reusing it when it exists and creating it from the base otherwise.

    Raises:
        GitStateError: If the base branch does not exist or the checkout fails.
    """
    base_sha = backend.resolve_reference(base)
    if base_sha is None:
        raise GitStateError(f"base branch {base!r} does not exist, check your inputs", context="resolving base branch")

    head_sha = backend.resolve_reference(head)
    if head_sha is not None:
        logger.info("Using existing head branch", head=branch_ref(head), commit=head_sha)
        backend.checkout(head, create=False)
        return BranchState(name=head, exists=True, commit_sha=head_sha)

    logger.info("Creating head branch from base", head=branch_ref(head), base=branch_ref(base), commit=base_sha)
    backend.checkout(head, create=True, start_point=base_sha)
    return BranchState(name=head, exists=False)


async def sync_repository(
    request: SyncRequest,
    backend: GitBackendBase,
    author: AuthorIdentity,
    clock: Callable[[], datetime] = utc_now,
) -> SyncResult:
    """Mirror the input directory into the head branch and force-push it.

    The phases run strictly in order and any failure halts the run: clone the
    base branch, fetch the head branch, resolve the head branch, replace the
    destination subdirectory, commit, and force-push.
    """
    head = request.output_head
    base = request.output_base
    with bound_contextvars(head=head, base=base):
        backend.clone(request.output_repo, base, CLONE_DEPTH)
        logger.info("Cloned repository", url=mask_url(request.output_repo), base=branch_ref(base))

        if head == base:
            logger.info("Head branch is the base branch, already cloned", head=head)
        else:
            await fetch_head_branch(backend, head)
        head_state = await resolve_head_branch(backend, head, base)

        logger.info("Sync changes", input_path=str(request.input_path), output_repo_path=request.output_repo_path)
        replace_directory_contents(request.input_path, backend.working_tree_dir, request.output_repo_path)
        backend.stage(request.output_repo_path)
        logger.info("Working tree status", status=backend.status())
        if not backend.has_staged_changes():
            logger.warning("Synchronized content is identical to the head branch, creating an empty commit")

        timestamp = request.commit_time or clock()
        sha = backend.commit(request.commit_message, author, timestamp)
        logger.info("Created commit", commit=sha, author=author.name, email=author.email, timestamp=timestamp.isoformat())
        backend.set_reference(head, sha)

        refspec = f"{branch_ref(head)}:{branch_ref(head)}"
        logger.info("Pushing", refspec=refspec)
        backend.push(refspec, force=True)

    return SyncResult(
        head=head_state,
        commit=CommitResult(sha=sha, author=author, timestamp=timestamp),
        pushed_ref=branch_ref(head),
    )
