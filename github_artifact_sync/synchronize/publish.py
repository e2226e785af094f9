"""Contains logic for reconciling a pushed head branch with its target branch."""

import structlog

from github_artifact_sync.github.abc import GitHubClientBase
from github_artifact_sync.synchronize.models import PublishDecision, PublishOutcome

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def merge_head_branch(github_adapter: GitHubClientBase, head: str, merge_base: str) -> PublishOutcome:
    """Merge the head branch straight into the merge base."""
    logger.info("Merging head branch", head=head, base=merge_base)
    commit = await github_adapter.merge_branches(head=head, base=merge_base)
    if commit is None:
        logger.info("Nothing to merge, base already contains head", head=head, base=merge_base)
        return PublishOutcome(decision=PublishDecision.MERGED)
    logger.info("Merged head branch", message=commit.commit.message, url=commit.html_url, commit=commit.sha)
    return PublishOutcome(decision=PublishDecision.MERGED, url=commit.html_url, sha=commit.sha)


async def ensure_pull_request(
    github_adapter: GitHubClientBase,
    owner: str,
    head: str,
    pr_base: str,
    title: str,
    body: str | None,
) -> PublishOutcome:
    """Create a draft pull request from head into the base unless an open one already exists."""
    existing_pull_requests = await github_adapter.list_pull_requests(state="open", head=f"{owner}:{head}", base=pr_base)
    if existing_pull_requests:
        for pull_request in existing_pull_requests:
            logger.info("Existing pull request", url=pull_request.html_url, number=pull_request.number)
        first = existing_pull_requests[0]
        return PublishOutcome(decision=PublishDecision.PULL_REQUEST_ALREADY_EXISTS, url=first.html_url, number=first.number)

    pull_request = await github_adapter.create_pull_request(title=title, head=head, base=pr_base, body=body, draft=True)
    logger.info("Created pull request", url=pull_request.html_url, number=pull_request.number)
    return PublishOutcome(decision=PublishDecision.PULL_REQUEST_CREATED, url=pull_request.html_url, number=pull_request.number)


async def reconcile_published_branch(
    github_adapter: GitHubClientBase,
    owner: str,
    head: str,
    title: str,
    body: str | None = None,
    merge_base: str | None = None,
    pr_base: str | None = None,
) -> PublishOutcome:
    """Merge the head branch or make sure exactly one open pull request exists for it.

    A merge base takes precedence over a pull request base. When neither is
    given, nothing happens after the push.
    """
    if merge_base:
        return await merge_head_branch(github_adapter, head, merge_base)
    if pr_base:
        return await ensure_pull_request(github_adapter, owner, head, pr_base, title, body)
    logger.info("No merge or pull request base set, leaving head branch as pushed", head=head)
    return PublishOutcome(decision=PublishDecision.NONE)
