"""Contains utility functions for GitHub interactions."""

from githubkit.exception import GitHubException, RequestFailed


def describe_github_error(exc: BaseException, fallback: str) -> str:
    """Turns a failed GitHub request into a human-readable message.

    Non-success responses are reported by status code; transport errors by
    their own message, or `fallback` when they carry none.
    """
    if isinstance(exc, RequestFailed):
        return f"HTTP error! status: {exc.response.status_code}"
    if isinstance(exc, GitHubException) and str(exc):
        return str(exc)
    return fallback
