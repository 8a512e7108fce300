"""Listing view: accumulated paginated users plus debounced search."""

import asyncio
from typing import Any

import structlog

from github_users_dashboard.dashboard.pagination import PaginationController
from github_users_dashboard.dashboard.search import SearchController
from github_users_dashboard.dashboard.state import ListingState
from github_users_dashboard.dashboard.visibility import VisibilityObserver, VisibilitySubscription
from github_users_dashboard.github.abc import GitHubUsersSourceBase
from github_users_dashboard.schemas.users import ListingSnapshot, UserSummary
from github_users_dashboard.utils.constants import DEFAULT_PAGE_SIZE, DEFAULT_SEARCH_DEBOUNCE_SECONDS
from github_users_dashboard.utils.templates import construct_jinja2_template_from_package, render_template_with_model

logger = structlog.get_logger(__name__)


class ListingView:
    """Owns the state, controllers and load-more trigger of one listing view.

    The last user of the accumulated listing is registered with the
    visibility observer whenever the view re-renders outside of search mode.
    Only one registration exists at a time.
    """

    def __init__(
        self,
        source: GitHubUsersSourceBase,
        observer: VisibilityObserver,
        page_size: int = DEFAULT_PAGE_SIZE,
        search_debounce_seconds: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    ) -> None:
        """Initialize an unmounted view."""
        self.state = ListingState()
        self.pagination = PaginationController(source, self.state, page_size=page_size, on_change=self.render)
        self.search = SearchController(source, self.state, debounce_seconds=search_debounce_seconds, on_change=self.render)
        self._observer = observer
        self._subscription: VisibilitySubscription | None = None
        self._sentinel: UserSummary | None = None
        self._trigger_tasks: set[asyncio.Task[Any]] = set()
        self._mounted = False

    @property
    def sentinel(self) -> UserSummary | None:
        """The user currently watched for visibility, if any."""
        return self._sentinel

    async def mount(self) -> None:
        """Start the view with the initial load of page 1."""
        self._mounted = True
        logger.info("Mounting listing view", page_size=self.pagination.page_size)
        await self.pagination.load_page(1)

    def render(self) -> list[UserSummary]:
        """Return the users to display and re-arm the load-more trigger."""
        self._rearm_trigger()
        return list(self.state.displayed_users)

    def _disarm_trigger(self) -> None:
        if self._subscription is not None:
            self._subscription.disconnect()
        self._subscription = None
        self._sentinel = None

    def _rearm_trigger(self) -> None:
        self._disarm_trigger()
        if not self._mounted or self.state.in_search_mode or not self.state.users:
            return
        self._sentinel = self.state.users[-1]
        self._subscription = self._observer.observe(self._sentinel, self._on_sentinel_visible)

    def _on_sentinel_visible(self) -> None:
        if not self._mounted or self.state.in_search_mode:
            return
        # A load started by an earlier reveal may not have reached the controller yet
        if not self.state.has_more or self.pagination.in_flight or self._trigger_tasks:
            logger.debug("Ignoring sentinel visibility", has_more=self.state.has_more, in_flight=self.pagination.in_flight)
            return
        task = asyncio.ensure_future(self.pagination.load_next_page())
        self._trigger_tasks.add(task)
        task.add_done_callback(self._trigger_tasks.discard)

    async def wait_until_idle(self) -> None:
        """Wait for trigger-started page loads and the pending search to finish."""
        while self._trigger_tasks:
            await asyncio.gather(*self._trigger_tasks)
        await self.search.flush()

    def set_query(self, text: str) -> None:
        """Forward a query edit to the search controller."""
        self.search.set_query(text)

    def clear_search(self) -> None:
        """Clear the query and restore the accumulated listing."""
        self.search.clear()

    async def retry(self) -> bool:
        """Restart pagination from page 1 after a failure."""
        return await self.pagination.retry()

    @property
    def summary(self) -> str:
        """One-line status for the listing header."""
        if self.state.in_search_mode:
            if self.state.is_searching:
                return "Searching..."
            count = len(self.state.search_results)
            if count == 0:
                return "No users found"
            return f"Found {count} user{'' if count == 1 else 's'}"
        return f"Total Users: {len(self.state.users)}"

    def snapshot(self) -> ListingSnapshot:
        """Capture what the view currently shows, for rendering."""
        return ListingSnapshot(
            users=self.render(),
            summary=self.summary,
            query=self.state.query,
            search_active=self.state.search_active,
            loading=self.state.loading,
            loading_more=self.state.loading_more,
            has_more=self.state.has_more,
            error=self.state.error,
        )

    def unmount(self) -> None:
        """Dispose of the trigger, the pending search and any running page load."""
        self._mounted = False
        self._disarm_trigger()
        self.search.close()
        for task in list(self._trigger_tasks):
            task.cancel()
        self._trigger_tasks.clear()
        logger.info("Unmounted listing view", total_users=len(self.state.users))


def render_listing(snapshot: ListingSnapshot) -> str:
    """Render a listing snapshot as text."""
    template = construct_jinja2_template_from_package("user_listing.j2")
    return render_template_with_model(model=snapshot, template=template)
