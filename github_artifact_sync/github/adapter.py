"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Literal, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import GitHubException, RequestFailed
from githubkit.versions.latest.models import (
    Commit,
    PrivateUser,
    PublicUser,
    PullRequest,
    PullRequestSimple,
)

from github_artifact_sync.configuration.models import GitHubCredentials
from github_artifact_sync.exceptions import APIError
from github_artifact_sync.utils.github import parse_github_repository_url

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def raise_api_error(context: str) -> Callable[[F], F]:
    """Decorator translating githubkit failures into APIError, logging the details GitHub reports."""

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except RequestFailed as exc:
                status_code = exc.response.status_code
                try:
                    error_data = exc.response.json()
                except Exception:
                    error_data = {}
                message = error_data.get("message", str(exc)) if isinstance(error_data, dict) else str(exc)
                errors = error_data.get("errors", []) if isinstance(error_data, dict) else []
                logger.error(
                    "GitHub request failed",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    url=str(getattr(exc.response, "url", None)),
                    status_code=status_code,
                )
                detail = f"{message} (HTTP {status_code})"
                if errors:
                    detail = f"{detail} | errors: {errors}"
                raise APIError(detail, context=context, status_code=status_code) from exc
            except GitHubException as exc:
                raise APIError(str(exc), context=context) from exc

        return wrapper  # type: ignore

    return decorator


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    async def create(
        cls,
        repo_url: str,
        credentials: GitHubCredentials,
        github_api_url: str = "https://api.github.com",
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo_url: Repository URL, e.g. 'https://github.com/owner/repo.git'
            credentials: Resolved token or username/password credentials
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ConfigError: If the repository URL cannot be parsed
        """
        owner, repo_name = parse_github_repository_url(repo_url)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
            auth_type=credentials.auth_type.value,
        )
        client = await get_github_client(credentials, github_api_url)
        return cls(client, owner, repo_name)

    # User Operations
    @raise_api_error("getting authenticated user")
    async def get_authenticated_user(self) -> PrivateUser | PublicUser:
        """Get the user the client is authenticated as."""
        response: Response[PrivateUser | PublicUser] = await self.client.rest.users.async_get_authenticated()
        return response.parsed_data

    # Branch Operations
    @raise_api_error("merging")
    async def merge_branches(self, head: str, base: str, commit_message: str | None = None) -> Commit | None:
        """Merge a head branch directly into a base branch.

        Returns the merge commit, or None when GitHub reports there was
        nothing to merge (HTTP 204).
        """
        params = self._omit_null_parameters(base=base, head=head, commit_message=commit_message)
        response: Response[Commit] = await self.client.rest.repos.async_merge(
            owner=self.owner,
            repo=self.repo_name,
            **params,
        )
        if response.status_code == 204:
            return None
        return response.parsed_data

    # Pull Request CRUD
    @raise_api_error("creating pr")
    async def create_pull_request(
        self,
        title: str,
        head: str,
        base: str,
        body: str | None = None,
        draft: bool | None = None,
        maintainer_can_modify: bool | None = None,
        **kwargs: Any,
    ) -> PullRequest:
        """Create a pull request for a repository."""
        params = self._omit_null_parameters(
            title=title,
            head=head,
            base=base,
            body=body,
            draft=draft,
            maintainer_can_modify=maintainer_can_modify,
            **kwargs,
        )
        response: Response[PullRequest] = await self.client.rest.pulls.async_create(
            owner=self.owner,
            repo=self.repo_name,
            **params,
        )
        return response.parsed_data

    @raise_api_error("getting existing prs")
    async def list_pull_requests(
        self,
        state: Literal["open", "closed", "all"] | None = "all",
        head: str | None = None,
        base: str | None = None,
        per_page: int = 100,
        **kwargs: Any,
    ) -> list[PullRequestSimple]:
        """List all pull requests for a repository, handling pagination."""
        params = self._omit_null_parameters(state=state, head=head, base=base, **kwargs)
        all_pull_requests: list[PullRequestSimple] = []
        page: int = 1
        while True:
            response: Response[list[PullRequestSimple]] = await self.client.rest.pulls.async_list(
                owner=self.owner,
                repo=self.repo_name,
                per_page=per_page,
                page=page,
                **params,
            )
            pull_requests: list[PullRequestSimple] = response.parsed_data
            if not pull_requests:
                break
            all_pull_requests.extend(pull_requests)
            if len(pull_requests) < per_page:
                break
            page += 1
        return all_pull_requests
