"""State container owned by one listing view instance."""

from dataclasses import dataclass, field

from github_users_dashboard.schemas.users import UserSummary


@dataclass
class ListingState:
    """Everything the listing view shows, mutated only by its controllers."""

    users: list[UserSummary] = field(default_factory=list)
    search_results: list[UserSummary] = field(default_factory=list)
    query: str = ""
    # A search request is outstanding
    is_searching: bool = False
    # The search result set is the display source
    search_active: bool = False
    # Page 1 is outstanding
    loading: bool = False
    # A page after the first is outstanding
    loading_more: bool = False
    has_more: bool = True
    # Last page loaded successfully, 0 before the first
    page: int = 0
    error: str | None = None
    initialized: bool = False

    @property
    def displayed_users(self) -> list[UserSummary]:
        """The users currently on screen."""
        if self.search_active:
            return self.search_results
        return self.users

    @property
    def in_search_mode(self) -> bool:
        """Whether the query box holds a non-blank query."""
        return bool(self.query.strip())
