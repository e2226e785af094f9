"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any, Literal


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients."""

    # User Operations
    @abstractmethod
    async def get_authenticated_user(self) -> Any:
        """Get the user the client is authenticated as."""
        pass

    # Branch Operations
    @abstractmethod
    async def merge_branches(self, head: str, base: str, commit_message: str | None = None) -> Any:
        """Merge a head branch directly into a base branch."""
        pass

    # Pull Request CRUD
    @abstractmethod
    async def list_pull_requests(
        self,
        state: Literal["open", "closed", "all"] | None = "all",
        head: str | None = None,
        base: str | None = None,
        **kwargs: Any,
    ) -> list[Any]:
        """List pull requests for a repository."""
        pass

    @abstractmethod
    async def create_pull_request(
        self,
        title: str,
        head: str,
        base: str,
        body: str | None = None,
        draft: bool | None = None,
        maintainer_can_modify: bool | None = None,
        **kwargs: Any,
    ) -> Any:
        """Create a pull request for a repository."""
        pass
