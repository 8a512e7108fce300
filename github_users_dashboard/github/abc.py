"""Base ABC for GitHub user sources."""

from abc import ABC, abstractmethod
from typing import Literal

from github_users_dashboard.schemas.users import RepositorySummary, UserProfile, UserSummary


class GitHubUsersSourceBase(ABC):
    """Base ABC for the GitHub endpoints the dashboard reads from."""

    @abstractmethod
    async def list_users(self, since: int, per_page: int) -> list[UserSummary]:
        """List users whose identifier is greater than `since`."""
        pass

    @abstractmethod
    async def search_users(self, query: str) -> list[UserSummary]:
        """Search users by free-text query."""
        pass

    @abstractmethod
    async def get_user(self, handle: str) -> UserProfile:
        """Get a single user's profile by handle."""
        pass

    @abstractmethod
    async def list_user_repositories(
        self,
        handle: str,
        per_page: int = 100,
        sort: Literal["created", "updated", "pushed", "full_name"] = "updated",
    ) -> list[RepositorySummary]:
        """List a user's repositories with a single capped request."""
        pass
