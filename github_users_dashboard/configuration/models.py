"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    ANONYMOUS = "anonymous"
    PAT = "pat"
    APP = "app"


@dataclass
class DashboardConfig:
    """Configuration class for the GitHub Users Dashboard CLI."""

    debug: bool
    github_api_url: str
    github_authentication_type: GitHubAuthenticationType
    github_pat_token: str | None
    github_app_id: int | None
    github_app_private_key_path: Path | None
    github_app_installation_id: int | None
    page_size: int
    repository_page_size: int
    search_debounce_seconds: float
