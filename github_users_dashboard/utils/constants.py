"""Shared constants used across the application."""

# This file is intended to hold shared constants.

# GitHub API Constants
# --------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default base URL of the GitHub REST API."""

DEFAULT_PAGE_SIZE = 30
"""Number of users requested per listing page."""

MAX_PAGE_SIZE = 100
"""Largest page size the GitHub REST API accepts."""

DEFAULT_REPOSITORY_PAGE_SIZE = 100
"""Cap on the number of repositories fetched for the detail view."""

DEFAULT_REPOSITORY_SORT = "updated"
"""Repositories are listed most-recently-updated first."""

# Dashboard Constants
# -------------------

DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.5
"""Pause in typing required before a search request is issued."""

NO_NAME_PLACEHOLDER = "No Name"
"""Shown in the detail view when a profile has no display name."""
