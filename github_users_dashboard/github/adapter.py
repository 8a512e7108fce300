"""GitHub users source adapter for the githubkit library."""

from pathlib import Path
from typing import Any, Literal, Self

import structlog
from githubkit import Response

from github_users_dashboard.configuration.models import GitHubAuthenticationType
from github_users_dashboard.schemas.users import RepositorySummary, UserProfile, UserSearchResults, UserSummary
from github_users_dashboard.utils.constants import DEFAULT_GITHUB_API_URL
from github_users_dashboard.utils.retry import retry_on_rate_limit

from .abc import GitHubUsersSourceBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

# Interactive views should not sit behind the multi-minute waits used by batch jobs.
INTERACTIVE_RETRY = {"max_retries": 3, "initial_delay": 1.0, "max_delay": 60.0}


class GitHubKitAdapter(GitHubUsersSourceBase):
    """GitHub users source adapter for the githubkit library."""

    def __init__(self, client: GitHubClient) -> None:
        """Initialize the adapter with an already-initialized client."""
        self.client = client

    @classmethod
    async def create(
        cls,
        github_auth_type: GitHubAuthenticationType = GitHubAuthenticationType.ANONYMOUS,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
    ) -> Self:
        """Create a new GitHub users source adapter.

        Args:
            github_auth_type: Type of authentication (ANONYMOUS, PAT or APP)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_app_installation_id: Installation ID (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        logger.info(
            "Creating client for GitHub instance",
            github_api_url=github_api_url,
            github_auth_type=github_auth_type.value,
        )
        client = await get_github_client(
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
        )
        return cls(client)

    @retry_on_rate_limit(**INTERACTIVE_RETRY)
    async def list_users(self, since: int, per_page: int) -> list[UserSummary]:
        """List users whose identifier is greater than `since`, in identifier order."""
        logger.debug("Listing users", since=since, per_page=per_page)
        response: Response[Any] = await self.client.rest.users.async_list(since=since, per_page=per_page)
        return [UserSummary.model_validate(item) for item in response.json()]

    @retry_on_rate_limit(**INTERACTIVE_RETRY)
    async def search_users(self, query: str) -> list[UserSummary]:
        """Search users by free-text query.

        A response without an ``items`` array is treated as having no results.
        """
        logger.debug("Searching users", query=query)
        response: Response[Any] = await self.client.rest.search.async_users(q=query)
        results = UserSearchResults.model_validate(response.json() or {})
        return list(results.items or [])

    @retry_on_rate_limit(**INTERACTIVE_RETRY)
    async def get_user(self, handle: str) -> UserProfile:
        """Get a single user's public profile by handle."""
        logger.debug("Fetching user profile", handle=handle)
        response: Response[Any] = await self.client.rest.users.async_get_by_username(username=handle)
        return UserProfile.model_validate(response.json())

    @retry_on_rate_limit(**INTERACTIVE_RETRY)
    async def list_user_repositories(
        self,
        handle: str,
        per_page: int = 100,
        sort: Literal["created", "updated", "pushed", "full_name"] = "updated",
    ) -> list[RepositorySummary]:
        """List a user's repositories with a single request capped at `per_page`."""
        logger.debug("Listing user repositories", handle=handle, per_page=per_page, sort=sort)
        response: Response[Any] = await self.client.rest.repos.async_list_for_user(username=handle, sort=sort, per_page=per_page)
        return [RepositorySummary.model_validate(item) for item in response.json()]
