# This file is intended to hold the setup for the authenticated githubkit client.

"""Sets up the authenticated githubkit client."""

from dataclasses import dataclass
from typing import Any, Generator, TypeAlias

import httpx
from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy
from githubkit.auth.base import BaseAuthStrategy

from github_artifact_sync.configuration.models import GitHubAuthenticationType, GitHubCredentials


class BasicOTPAuth(httpx.BasicAuth):
    """HTTP basic authentication that also sends a GitHub one-time password when set."""

    def __init__(self, username: str, password: str, otp: str | None = None) -> None:
        super().__init__(username, password)
        self.otp = otp

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if self.otp:
            request.headers["X-GitHub-OTP"] = self.otp
        yield from super().auth_flow(request)


@dataclass
class BasicAuthStrategy(BaseAuthStrategy):
    """githubkit auth strategy for username/password authentication with optional OTP."""

    username: str
    password: str
    otp: str | None = None

    def get_auth_flow(self, github: Any) -> httpx.Auth:
        return BasicOTPAuth(self.username, self.password, self.otp)


GitHubClient: TypeAlias = GitHub[TokenAuthStrategy] | GitHub[BasicAuthStrategy]


def get_auth_strategy(credentials: GitHubCredentials) -> TokenAuthStrategy | BasicAuthStrategy:
    """Returns the githubkit auth strategy matching the resolved credentials."""
    if credentials.auth_type == GitHubAuthenticationType.TOKEN:
        if not credentials.token:
            raise RuntimeError("GitHub token authentication requires a token in config.")
        return TokenAuthStrategy(credentials.token)
    if not (credentials.username and credentials.password):
        raise RuntimeError("GitHub basic authentication requires a username and password in config.")
    return BasicAuthStrategy(credentials.username, credentials.password, credentials.otp)


async def get_github_client(credentials: GitHubCredentials, github_api_url: str) -> GitHubClient:
    """Returns an authenticated GitHub client using either token or username/password credentials.

    Supports custom base URL for GitHub Enterprise Server (GHES).
    """
    # Disable HTTP caching to always get fresh data
    return GitHub(auth=get_auth_strategy(credentials), base_url=github_api_url, http_cache=False)
