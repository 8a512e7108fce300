"""Incremental loading of the accumulated user listing."""

from typing import Callable, Iterable

import structlog
from githubkit.exception import GitHubException
from pydantic import ValidationError

from github_users_dashboard.dashboard.state import ListingState
from github_users_dashboard.github.abc import GitHubUsersSourceBase
from github_users_dashboard.schemas.users import UserSummary
from github_users_dashboard.utils.constants import DEFAULT_PAGE_SIZE
from github_users_dashboard.utils.github import describe_github_error

logger = structlog.get_logger(__name__)


def merge_unique_users(existing: list[UserSummary], incoming: Iterable[UserSummary]) -> list[UserSummary]:
    """Append the users of `incoming` whose identifier is not already present.

    Order is preserved: existing users first, then new users in the order
    they were received. Repeats inside `incoming` are dropped as well.
    """
    seen = {user.id for user in existing}
    merged = list(existing)
    for user in incoming:
        if user.id in seen:
            continue
        seen.add(user.id)
        merged.append(user)
    return merged


class PaginationController:
    """Loads pages of users into a `ListingState`.

    Page `n` maps onto GitHub's cursor based listing as
    ``since=(n - 1) * page_size``. Every request is tagged, and only the most
    recently issued request may write to the state.
    """

    def __init__(
        self,
        source: GitHubUsersSourceBase,
        state: ListingState,
        page_size: int = DEFAULT_PAGE_SIZE,
        on_change: Callable[[], object] | None = None,
    ) -> None:
        """Initialize the controller over a source and the state it owns."""
        self.source = source
        self.state = state
        self.page_size = page_size
        self.on_change = on_change
        self._latest_request = 0

    @property
    def in_flight(self) -> bool:
        """Whether a page request is outstanding."""
        return self.state.loading or self.state.loading_more

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _is_stale(self, request: int, page: int) -> bool:
        if request != self._latest_request:
            logger.info("Discarding superseded page response", page=page, request=request, latest_request=self._latest_request)
            return True
        return False

    async def load_page(self, page: int) -> bool:
        """Request page `page` and merge it into the accumulated listing.

        Page 1 replaces the listing; later pages are de-duplicated by user
        identifier and appended. An empty page marks the listing exhausted for
        the lifetime of the controller. A failed request, or a response that
        does not parse, only sets the error message, leaving the listing, the
        current page and the exhausted flag untouched.

        Returns:
            Whether a request was issued. Pages after the first are refused
            once the listing is exhausted.
        """
        if page < 1:
            raise ValueError(f"Pages are numbered from 1, got {page}")
        if page > 1 and not self.state.has_more:
            logger.debug("Listing exhausted, not requesting page", page=page)
            return False

        self._latest_request += 1
        request = self._latest_request
        self.state.loading = page == 1
        self.state.loading_more = page > 1
        self.state.error = None
        self._notify()

        logger.info("Loading users page", page=page, page_size=self.page_size)
        try:
            users = await self.source.list_users(since=(page - 1) * self.page_size, per_page=self.page_size)
        except (GitHubException, ValidationError) as exc:
            if self._is_stale(request, page):
                return True
            self.state.loading = False
            self.state.loading_more = False
            self.state.error = describe_github_error(exc, "Failed to fetch users")
            logger.error("Failed to load users page", page=page, error=self.state.error)
            self._notify()
            return True

        if self._is_stale(request, page):
            return True
        self.state.loading = False
        self.state.loading_more = False

        if page == 1:
            self.state.initialized = True
        if not users:
            self.state.has_more = False
            logger.info("Users listing exhausted", page=page, total_users=len(self.state.users))
        elif page == 1:
            self.state.users = merge_unique_users([], users)
            self.state.page = page
        else:
            before = len(self.state.users)
            self.state.users = merge_unique_users(self.state.users, users)
            self.state.page = page
            logger.debug(
                "Merged users page",
                page=page,
                received=len(users),
                added=len(self.state.users) - before,
                total_users=len(self.state.users),
            )
        self._notify()
        return True

    async def load_next_page(self) -> bool:
        """Request the page after the last one loaded, if any remain and none is in flight."""
        if not self.state.has_more or self.in_flight:
            return False
        return await self.load_page(self.state.page + 1)

    async def retry(self) -> bool:
        """Clear the error and restart pagination from page 1."""
        self.state.error = None
        return await self.load_page(1)
