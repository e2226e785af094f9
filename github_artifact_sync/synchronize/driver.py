"""Orchestrates the synchronization of artifacts into a GitHub repository."""

import time

import structlog

from github_artifact_sync.configuration.models import SyncRequest
from github_artifact_sync.git.abc import GitBackendBase
from github_artifact_sync.git.adapter import GitPythonBackend
from github_artifact_sync.github.abc import GitHubClientBase
from github_artifact_sync.github.adapter import GitHubKitAdapter
from github_artifact_sync.synchronize.engine import author_identity_from_user, sync_repository
from github_artifact_sync.synchronize.publish import reconcile_published_branch
from github_artifact_sync.synchronize.results import SyncWorkflowResult
from github_artifact_sync.utils.github import parse_github_repository_url

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_sync_workflow(
    request: SyncRequest,
    github_adapter: GitHubClientBase | None = None,
    git_backend: GitBackendBase | None = None,
) -> SyncWorkflowResult:
    """Run the sync workflow: authenticate, mirror and push, then merge or open a pull request.

    The two halves are not transactional; when reconciliation fails, the
    pushed head branch stays on the remote.
    """
    owner, _ = parse_github_repository_url(request.output_repo)
    if github_adapter is None:
        github_adapter = await GitHubKitAdapter.create(
            repo_url=request.output_repo,
            credentials=request.credentials,
            github_api_url=request.github_api_url,
        )

    user = await github_adapter.get_authenticated_user()
    logger.info("Signed in", login=user.login)
    author = author_identity_from_user(user)

    start_time = time.time()
    if git_backend is None:
        with GitPythonBackend(request.credentials) as backend:
            sync_result = await sync_repository(request, backend, author)
    else:
        sync_result = await sync_repository(request, git_backend, author)
    logger.info("Pushed head branch", ref=sync_result.pushed_ref, commit=sync_result.commit.sha, duration=round(time.time() - start_time, 2))

    publish_outcome = await reconcile_published_branch(
        github_adapter,
        owner=owner,
        head=request.output_head,
        title=request.commit_message,
        body=request.pr_body,
        merge_base=request.merge_base,
        pr_base=request.pr_base,
    )
    logger.info("Sync workflow complete", decision=publish_outcome.decision.value, url=publish_outcome.url)
    return SyncWorkflowResult(sync_result, publish_outcome)
