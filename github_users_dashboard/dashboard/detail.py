"""Detail view: one user's profile and repositories."""

import asyncio

import structlog

from github_users_dashboard.github.abc import GitHubUsersSourceBase
from github_users_dashboard.schemas.users import UserDetail
from github_users_dashboard.utils.constants import DEFAULT_REPOSITORY_PAGE_SIZE, DEFAULT_REPOSITORY_SORT
from github_users_dashboard.utils.templates import construct_jinja2_template_from_package, render_template_with_model

logger = structlog.get_logger(__name__)


class DetailFetcher:
    """Fetches the profile and repositories behind one detail view.

    Nothing is cached between handles. A failed request is not recovered
    here; the githubkit exception propagates to whoever opened the view.
    """

    def __init__(self, source: GitHubUsersSourceBase, repository_page_size: int = DEFAULT_REPOSITORY_PAGE_SIZE) -> None:
        """Initialize the fetcher over a source."""
        self.source = source
        self.repository_page_size = repository_page_size

    async def fetch(self, handle: str) -> UserDetail:
        """Fetch the profile and the most recently updated repositories of `handle`."""
        logger.info("Fetching user detail", handle=handle)
        profile, repositories = await asyncio.gather(
            self.source.get_user(handle),
            self.source.list_user_repositories(handle, per_page=self.repository_page_size, sort=DEFAULT_REPOSITORY_SORT),
        )
        logger.debug("Fetched user detail", handle=handle, repositories=len(repositories))
        return UserDetail(profile=profile, repositories=repositories)


def render_user_detail(detail: UserDetail) -> str:
    """Render a fetched detail view as text."""
    template = construct_jinja2_template_from_package("user_detail.j2")
    return render_template_with_model(model=detail, template=template)
