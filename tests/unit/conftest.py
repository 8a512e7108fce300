"""Fixtures for unit tests."""

from typing import Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from github_users_dashboard.github.abc import GitHubUsersSourceBase
from github_users_dashboard.schemas.users import UserSummary


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


def build_user(user_id: int) -> UserSummary:
    """Build a user summary whose fields are derived from its identifier."""
    return UserSummary(
        id=user_id,
        login=f"user{user_id}",
        avatar_url=f"https://avatars.githubusercontent.com/u/{user_id}",
        html_url=f"https://github.com/user{user_id}",
    )


@pytest.fixture
def make_users() -> Callable[[int, int], list[UserSummary]]:
    """Factory for users with consecutive identifiers from `first` to `last` inclusive."""

    def _make_users(first: int, last: int) -> list[UserSummary]:
        return [build_user(user_id) for user_id in range(first, last + 1)]

    return _make_users


@pytest.fixture
def source() -> MagicMock:
    """A users source whose endpoints are all AsyncMocks."""
    fake_source = MagicMock(spec=GitHubUsersSourceBase)
    fake_source.list_users = AsyncMock(return_value=[])
    fake_source.search_users = AsyncMock(return_value=[])
    fake_source.get_user = AsyncMock()
    fake_source.list_user_repositories = AsyncMock(return_value=[])
    return fake_source


@pytest.fixture
def failed_response() -> Callable[[int], MagicMock]:
    """Factory for the response object carried by a githubkit RequestFailed."""

    def _failed_response(status_code: int, headers: dict[str, str] | None = None) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.headers = headers or {}
        return response

    return _failed_response
