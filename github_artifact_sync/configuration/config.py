"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Pipeline-provided identifiers used to derive the default commit message
    CI_PROJECT_NAME: str | None = None
    CI_COMMIT_REF_NAME: str | None = None
