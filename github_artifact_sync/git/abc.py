"""Base ABC for git backends."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from github_artifact_sync.synchronize.models import AuthorIdentity


class GitBackendBase(ABC):
    """Base ABC for the version-control operations the sync workflow needs."""

    @property
    @abstractmethod
    def working_tree_dir(self) -> Path:
        """Root of the cloned working tree."""
        pass

    @abstractmethod
    def clone(self, url: str, branch: str, depth: int) -> None:
        """Clone a single branch of a repository at the given depth."""
        pass

    @abstractmethod
    def fetch(self, refspec: str, depth: int) -> None:
        """Fetch a refspec from origin, raising FetchError classified by failure kind."""
        pass

    @abstractmethod
    def resolve_reference(self, branch: str) -> str | None:
        """Return the commit a local branch points to, or None if it does not exist."""
        pass

    @abstractmethod
    def checkout(self, branch: str, create: bool = False, start_point: str | None = None) -> None:
        """Check out an existing branch, or create it at start_point."""
        pass

    @abstractmethod
    def stage(self, path: str) -> None:
        """Stage all additions, modifications, and deletions under a path."""
        pass

    @abstractmethod
    def status(self) -> str:
        """Return a short, human readable status of the working tree."""
        pass

    @abstractmethod
    def has_staged_changes(self) -> bool:
        """Return whether the index differs from HEAD."""
        pass

    @abstractmethod
    def commit(self, message: str, author: AuthorIdentity, when: datetime) -> str:
        """Commit the index and return the new commit's SHA."""
        pass

    @abstractmethod
    def set_reference(self, branch: str, sha: str) -> None:
        """Point a local branch reference at a commit."""
        pass

    @abstractmethod
    def push(self, refspec: str, force: bool = False) -> None:
        """Push a refspec to origin."""
        pass
