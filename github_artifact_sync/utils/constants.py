"""Shared constants used across the application."""

import re

# Branch Naming Constants
# -----------------------

DEFAULT_HEAD_BRANCH_PREFIX = "auto/sync"
"""Prefix of head branches derived when no explicit head branch is given."""

HEAD_BRANCH_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
"""strftime format of the UTC timestamp appended to derived head branch names."""

# Commit Constants
# ----------------

COMMIT_TIME_NOW = "now"
"""Sentinel commit timestamp meaning the wall clock at commit time."""

RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)
"""Pattern a non-sentinel commit timestamp must match (RFC 3339 / ISO 8601 with offset)."""

DEFAULT_REF_NAME = "unknown"
"""Ref name used in the derived commit message when the pipeline provides none."""

NOREPLY_EMAIL_DOMAIN = "users.noreply.github.com"
"""Domain of the synthesized author email for users without a public email."""

# Git Constants
# -------------

CLONE_DEPTH = 1
"""Depth used for both the initial clone and the head branch fetch."""

GIT_DIRECTORY_NAME = ".git"
"""Name of the repository metadata directory, never mirrored or removed."""
