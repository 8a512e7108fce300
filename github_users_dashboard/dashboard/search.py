"""Debounced free-text search over GitHub users."""

from typing import Callable

import structlog
from githubkit.exception import GitHubException
from pydantic import ValidationError

from github_users_dashboard.dashboard.debounce import Debouncer
from github_users_dashboard.dashboard.state import ListingState
from github_users_dashboard.github.abc import GitHubUsersSourceBase
from github_users_dashboard.utils.constants import DEFAULT_SEARCH_DEBOUNCE_SECONDS
from github_users_dashboard.utils.github import describe_github_error

logger = structlog.get_logger(__name__)


class SearchController:
    """Turns query edits into search requests without disturbing the accumulated listing."""

    def __init__(
        self,
        source: GitHubUsersSourceBase,
        state: ListingState,
        debounce_seconds: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS,
        on_change: Callable[[], object] | None = None,
    ) -> None:
        """Initialize the controller over a source and the state it shares with pagination."""
        self.source = source
        self.state = state
        self.on_change = on_change
        self._debouncer = Debouncer(debounce_seconds, self.search)
        self._generation = 0

    @property
    def pending(self) -> bool:
        """Whether a debounced search is waiting to be issued."""
        return self._debouncer.pending

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _leave_search_mode(self) -> None:
        self._debouncer.cancel()
        # Anything still in flight now belongs to an abandoned query
        self._generation += 1
        self.state.is_searching = False
        self.state.search_active = False
        self.state.search_results = []

    def set_query(self, text: str) -> None:
        """Record a query edit.

        A blank query leaves search mode immediately. Anything else is searched
        once input has paused for the debounce delay.
        """
        self.state.query = text
        if not text.strip():
            self._leave_search_mode()
            self._notify()
            return
        self._debouncer.schedule(text)
        self._notify()

    def clear(self) -> None:
        """Empty the query, drop the search results and restore the accumulated listing."""
        self.state.query = ""
        self._leave_search_mode()
        self.state.error = None
        self._notify()

    async def search(self, query: str) -> None:
        """Issue a search request for `query` right away.

        On failure the last successful results stay on screen unless the
        recorded query is blank. Debounced searches never see a blank query
        here, since emptying it supersedes them; only direct calls made while
        no query is recorded fall back to the accumulated listing.
        """
        if not query.strip():
            self._leave_search_mode()
            self._notify()
            return

        self._generation += 1
        generation = self._generation
        self.state.is_searching = True
        self.state.error = None
        self._notify()

        logger.info("Searching users", query=query)
        try:
            results = await self.source.search_users(query.strip())
        except (GitHubException, ValidationError) as exc:
            if generation != self._generation:
                logger.info("Discarding superseded search failure", query=query)
                return
            self.state.is_searching = False
            self.state.error = describe_github_error(exc, "Failed to search users")
            if not self.state.in_search_mode:
                self.state.search_active = False
            logger.error("Failed to search users", query=query, error=self.state.error)
            self._notify()
            return

        if generation != self._generation:
            logger.info("Discarding superseded search results", query=query, results=len(results))
            return
        self.state.is_searching = False
        self.state.search_results = results
        self.state.search_active = True
        logger.debug("Search complete", query=query, results=len(results))
        self._notify()

    async def flush(self) -> None:
        """Issue the pending debounced search now and wait for it to complete."""
        await self._debouncer.flush()

    def close(self) -> None:
        """Cancel pending and running searches."""
        self._debouncer.close()
        self._generation += 1
