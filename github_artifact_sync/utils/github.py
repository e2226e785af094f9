"""Contains utility functions for GitHub interactions."""

from urllib.parse import quote, urlsplit, urlunsplit

from github_artifact_sync.configuration.models import GitHubAuthenticationType, GitHubCredentials
from github_artifact_sync.exceptions import ConfigError
from github_artifact_sync.utils.constants import NOREPLY_EMAIL_DOMAIN
from github_artifact_sync.utils.helpers import first_non_empty


def _repository_url_path(url: str) -> str:
    """Return the path portion of an HTTPS or scp-like SSH repository URL."""
    if "://" not in url and ":" in url:
        # scp-like syntax, e.g. git@github.com:owner/repo.git
        return url.split(":", 1)[1]
    return urlsplit(url).path


def parse_github_repository_url(url: str | None) -> tuple[str, str]:
    """Parses a repository URL into its owner and repository name.

    The first two non-empty path segments are used, after stripping
    leading/trailing slashes and a trailing ``.git`` suffix.

    Raises:
        ConfigError: If the URL is empty or has fewer than two path segments.
    """
    if not url:
        raise ConfigError("No output repository set", context="parsing url")
    path = _repository_url_path(url).strip("/").removesuffix(".git").strip("/")
    segments = [segment for segment in path.split("/") if segment]
    if len(segments) < 2:
        raise ConfigError(f"invalid github url {mask_url(url)!r}", context="parsing url")
    return segments[0], segments[1]


def mask_url(url: str) -> str:
    """Mask a password embedded in a URL, keeping the username visible."""
    parts = urlsplit(url)
    if parts.username is None:
        return url
    netloc = parts.hostname or ""
    if parts.port is not None:
        netloc = f"{netloc}:{parts.port}"
    userinfo = parts.username if parts.password is None else f"{parts.username}:masked"
    return urlunsplit(parts._replace(netloc=f"{userinfo}@{netloc}"))


def authenticate_url(url: str, credentials: GitHubCredentials) -> str:
    """Embed credentials into an HTTP(S) repository URL for git transport.

    URLs using any other scheme (SSH, file) are returned unchanged.
    """
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        return url
    if credentials.auth_type == GitHubAuthenticationType.TOKEN:
        userinfo = f"x-access-token:{quote(credentials.token or '', safe='')}"
    else:
        userinfo = f"{quote(credentials.username or '', safe='')}:{quote(credentials.password or '', safe='')}"
    netloc = parts.hostname or ""
    if parts.port is not None:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit(parts._replace(netloc=f"{userinfo}@{netloc}"))


def author_email_for_user(login: str, email: str | None) -> str:
    """Return the user's public email, or a no-reply address derived from the login."""
    return first_non_empty(email, f"{login}@{NOREPLY_EMAIL_DOMAIN}")
