"""Contains exceptions raised when reconciling application configuration."""

from github_artifact_sync.exceptions import ConfigError


class GitHubAuthenticationConfigurationUndefinedError(ConfigError):
    """Raised when the GitHub authentication configuration is undefined or ambiguous."""

    pass


class RequiredConfigurationElementError(ConfigError):
    """Raised when a required configuration element is missing."""

    def __init__(self, name: str, cli_name: str, env_name: str) -> None:
        """Initializes the exception with the name of the missing element."""
        super().__init__(
            f"Missing required configuration element: {name} (command line option {cli_name}, environment variable {env_name})"
        )
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name
