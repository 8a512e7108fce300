"""Reconcile configuration between CLI arguments and environment variables."""

from pathlib import Path

import structlog

from github_users_dashboard.configuration.env import settings
from github_users_dashboard.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidConfigurationElementError,
)
from github_users_dashboard.configuration.models import DashboardConfig, GitHubAuthenticationType
from github_users_dashboard.utils.constants import MAX_PAGE_SIZE

logger = structlog.get_logger(__name__)


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    The listing, search, profile and repository endpoints are all public, so
    providing no credentials at all is valid and results in anonymous access
    (subject to GitHub's lower unauthenticated rate limits).

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If both PAT and App configurations
            are defined, or if the App configuration is incomplete.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    if github_pat_token and (github_app_id or github_app_private_key_path or github_app_installation_id):
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if github_app_id and github_app_private_key_path and github_app_installation_id:
        return GitHubAuthenticationType.APP
    elif github_app_id or github_app_private_key_path or github_app_installation_id:
        missing_settings: list[dict[str, str]] = []
        if not github_app_id:
            missing_settings.append(
                {
                    "name": "GitHub App ID",
                    "cli_name": "github_app_id",
                    "env_name": "GITHUB_APP_ID",
                }
            )
        if not github_app_private_key_path:
            missing_settings.append(
                {
                    "name": "GitHub App private key path",
                    "cli_name": "github_app_private_key_path",
                    "env_name": "GITHUB_APP_PRIVATE_KEY_PATH",
                }
            )
        if not github_app_installation_id:
            missing_settings.append(
                {
                    "name": "GitHub App installation ID",
                    "cli_name": "github_app_installation_id",
                    "env_name": "GITHUB_APP_INSTALLATION_ID",
                }
            )
        msg = "Incomplete GitHub App configuration - missing settings include " + ", ".join(
            f"{setting['name']} (command line option {setting['cli_name']}, environment variable {setting['env_name']})"
            for setting in missing_settings
        )
        raise GitHubAuthenticationConfigurationUndefinedError(msg)

    logger.debug("No GitHub credentials configured, using anonymous access")
    return GitHubAuthenticationType.ANONYMOUS


async def validate_dashboard_limits(page_size: int, repository_page_size: int, search_debounce_seconds: float) -> None:
    """Validates the numeric dashboard settings against what the GitHub API accepts."""
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise InvalidConfigurationElementError("page_size", page_size, f"must be between 1 and {MAX_PAGE_SIZE}")
    if not 1 <= repository_page_size <= MAX_PAGE_SIZE:
        raise InvalidConfigurationElementError("repository_page_size", repository_page_size, f"must be between 1 and {MAX_PAGE_SIZE}")
    if search_debounce_seconds < 0:
        raise InvalidConfigurationElementError("search_debounce_seconds", search_debounce_seconds, "must not be negative")


async def reconcile_dashboard_configuration(
    cli_debug: bool | None = None,
    cli_github_api_url: str | None = None,
    cli_github_pat_token: str | None = None,
    cli_github_app_id: int | None = None,
    cli_github_app_private_key_path: Path | None = None,
    cli_github_app_installation_id: int | None = None,
    cli_page_size: int | None = None,
    cli_repository_page_size: int | None = None,
    cli_search_debounce_seconds: float | None = None,
) -> DashboardConfig:
    """Reconciles CLI arguments with environment settings.

    A value given on the command line always wins; otherwise the value from
    the environment (or `.env` file) is used.
    """
    debug = cli_debug if cli_debug is not None else settings.DEBUG
    github_api_url = cli_github_api_url or settings.GITHUB_API_URL
    github_pat_token = cli_github_pat_token or settings.GITHUB_PAT_TOKEN
    github_app_id = cli_github_app_id or settings.GITHUB_APP_ID
    github_app_private_key_path = cli_github_app_private_key_path or settings.GITHUB_APP_PRIVATE_KEY_PATH
    github_app_installation_id = cli_github_app_installation_id or settings.GITHUB_APP_INSTALLATION_ID
    page_size = cli_page_size if cli_page_size is not None else settings.PAGE_SIZE
    repository_page_size = cli_repository_page_size if cli_repository_page_size is not None else settings.REPOSITORY_PAGE_SIZE
    search_debounce_seconds = cli_search_debounce_seconds if cli_search_debounce_seconds is not None else settings.SEARCH_DEBOUNCE_SECONDS

    github_authentication_type = await validate_github_authentication_configuration(
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )
    await validate_dashboard_limits(page_size, repository_page_size, search_debounce_seconds)

    return DashboardConfig(
        debug=debug,
        github_api_url=github_api_url,
        github_authentication_type=github_authentication_type,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
        page_size=page_size,
        repository_page_size=repository_page_size,
        search_debounce_seconds=search_debounce_seconds,
    )
