"""General utility functions and helper classes."""

from datetime import datetime, timezone

from github_artifact_sync.utils.constants import DEFAULT_HEAD_BRANCH_PREFIX, HEAD_BRANCH_TIMESTAMP_FORMAT


def generate_head_branch_name(now: datetime | None = None, prefix: str = DEFAULT_HEAD_BRANCH_PREFIX) -> str:
    """Generate a timestamped head branch name like 'auto/sync/20240102T150405Z'."""
    moment = now or datetime.now(timezone.utc)
    return f"{prefix}/{moment.astimezone(timezone.utc).strftime(HEAD_BRANCH_TIMESTAMP_FORMAT)}"


def first_non_empty(*values: str | None) -> str:
    """Return the first value that is neither None nor empty, or an empty string."""
    for value in values:
        if value:
            return value
    return ""
