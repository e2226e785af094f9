"""Exceptions raised by the artifact synchronization workflow.

Every error is fatal at first occurrence. Each exception carries a short
``context`` describing the phase that failed, which is prefixed to the
message so the operator sees where the run stopped.
"""

from enum import Enum


class SyncWorkflowError(Exception):
    """Base class for all fatal workflow errors."""

    def __init__(self, message: str, context: str | None = None) -> None:
        """Initializes the exception with a message and an optional phase description."""
        self.context = context
        self.detail = message
        super().__init__(f"{context}: {message}" if context else message)


class ConfigError(SyncWorkflowError):
    """Raised when required configuration is missing or invalid."""


class InputError(SyncWorkflowError):
    """Raised when a supplied input value cannot be parsed."""


class NetworkError(SyncWorkflowError):
    """Raised when a clone, fetch, or push transport operation fails."""


class GitStateError(SyncWorkflowError):
    """Raised when the local repository is not in the state the workflow requires."""


class APIError(SyncWorkflowError):
    """Raised when a GitHub API operation fails."""

    def __init__(self, message: str, context: str | None = None, status_code: int | None = None) -> None:
        """Initializes the exception with the HTTP status code reported by GitHub, if any."""
        super().__init__(message, context)
        self.status_code = status_code


class FetchFailureKind(str, Enum):
    """Classification of a failed fetch of the head branch."""

    ALREADY_UP_TO_DATE = "already-up-to-date"
    NO_MATCHING_REF = "no-matching-ref"
    OTHER = "other"


class FetchError(NetworkError):
    """Raised when fetching a reference fails."""

    def __init__(self, message: str, kind: FetchFailureKind, context: str | None = None) -> None:
        """Initializes the exception with the classified failure kind."""
        super().__init__(message, context)
        self.kind = kind


def is_benign_fetch_failure(error: FetchError) -> bool:
    """Return whether a fetch failure means the head branch is current or does not exist yet."""
    return error.kind in (FetchFailureKind.ALREADY_UP_TO_DATE, FetchFailureKind.NO_MATCHING_REF)
