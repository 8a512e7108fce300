"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REPOSITORY_PAGE_SIZE,
    DEFAULT_REPOSITORY_SORT,
    DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    MAX_PAGE_SIZE,
)
from .retry import retry_on_rate_limit

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_REPOSITORY_PAGE_SIZE",
    "DEFAULT_REPOSITORY_SORT",
    "DEFAULT_SEARCH_DEBOUNCE_SECONDS",
    "MAX_PAGE_SIZE",
    "retry_on_rate_limit",
]
