"""Pydantic schemas for the GitHub users, profiles and repositories shown by the dashboard."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """Pydantic model for a user as returned by the listing and search endpoints."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    login: str
    avatar_url: str
    html_url: str


class UserProfile(UserSummary):
    """Pydantic model for a single user's public profile."""

    name: str | None = None
    bio: str | None = None
    location: str | None = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    public_gists: int = 0


class RepositorySummary(BaseModel):
    """Pydantic model for a repository owned by a user."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    html_url: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    updated_at: datetime | None = None
    visibility: str = "public"


class UserSearchResults(BaseModel):
    """Pydantic model for the search endpoint's response container."""

    model_config = ConfigDict(extra="ignore")

    total_count: int = 0
    incomplete_results: bool = False
    items: list[UserSummary] | None = None


class UserDetail(BaseModel):
    """Profile and repositories fetched together for one detail view."""

    profile: UserProfile
    repositories: list[RepositorySummary]

    @property
    def has_repositories(self) -> bool:
        """Whether the user has any repositories to show."""
        return len(self.repositories) > 0


class ListingSnapshot(BaseModel):
    """What the listing view shows at one point in time."""

    users: list[UserSummary]
    summary: str
    query: str = ""
    search_active: bool = False
    loading: bool = False
    loading_more: bool = False
    has_more: bool = True
    error: str | None = None
