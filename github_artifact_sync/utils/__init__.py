"""Utility modules for shared functionality."""

from .constants import (
    COMMIT_TIME_NOW,
    DEFAULT_HEAD_BRANCH_PREFIX,
    DEFAULT_REF_NAME,
    HEAD_BRANCH_TIMESTAMP_FORMAT,
    NOREPLY_EMAIL_DOMAIN,
)
from .helpers import first_non_empty, generate_head_branch_name

__all__ = [
    "COMMIT_TIME_NOW",
    "DEFAULT_HEAD_BRANCH_PREFIX",
    "DEFAULT_REF_NAME",
    "HEAD_BRANCH_TIMESTAMP_FORMAT",
    "NOREPLY_EMAIL_DOMAIN",
    "first_non_empty",
    "generate_head_branch_name",
]
