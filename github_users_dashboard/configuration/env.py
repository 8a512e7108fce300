"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from github_users_dashboard.utils.constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REPOSITORY_PAGE_SIZE,
    DEFAULT_SEARCH_DEBOUNCE_SECONDS,
)


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None
    GITHUB_APP_INSTALLATION_ID: int | None = None

    # Dashboard settings
    PAGE_SIZE: int = DEFAULT_PAGE_SIZE
    REPOSITORY_PAGE_SIZE: int = DEFAULT_REPOSITORY_PAGE_SIZE
    SEARCH_DEBOUNCE_SECONDS: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS


settings = Settings()
