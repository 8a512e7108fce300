"""Retry decorator for handling GitHub API rate limits.

Anonymous access to the listing and search endpoints is limited to a handful of
requests per minute, so every call the dashboard makes goes through this
decorator. It waits for as long as GitHub asks (``retry-after`` or
``x-ratelimit-reset``) and falls back to exponential backoff otherwise.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _is_rate_limit_response(exc: RequestFailed) -> bool:
    """Whether a failed response is GitHub refusing the request because of rate limits."""
    if exc.response.status_code == 429:
        return True
    return exc.response.status_code == 403 and exc.response.headers.get("x-ratelimit-remaining") == "0"


def _wait_time_from_headers(exc: RequestFailed, default: float, function_name: str) -> float:
    """Derive how long to wait from the rate limit headers of a failed response."""
    retry_after = exc.response.headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after, function=function_name)
            return default

    rate_limit_reset = exc.response.headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            reset_timestamp = int(rate_limit_reset)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset, function=function_name)
            return default
        current_timestamp = int(time.time())
        if reset_timestamp > current_timestamp:
            return reset_timestamp - current_timestamp + 1
    return default


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async GitHub calls that hit a rate limit.

    Only rate limit failures are retried. Any other non-success response or
    transport error is raised immediately so the caller can show it.

    Args:
        max_retries: Maximum number of retry attempts
        initial_delay: Initial delay in seconds between retries
        max_delay: Maximum delay in seconds between retries
        exponential_base: Base for exponential backoff calculation

    Returns:
        Decorated function with retry logic

    Example:
        @retry_on_rate_limit(max_retries=3)
        async def get_user(self, handle: str) -> UserProfile:
            ...
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay

            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as e:
                    if attempt == max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            error_type=type(e).__name__,
                        )
                        raise
                    # These exceptions already carry retry_after as a timedelta
                    if getattr(e, "retry_after", None):
                        wait_time = min(e.retry_after.total_seconds(), max_delay)
                    else:
                        wait_time = min(delay, max_delay)
                    rate_limit_type = "primary" if isinstance(e, PrimaryRateLimitExceeded) else "secondary"
                except RequestFailed as e:
                    if not _is_rate_limit_response(e):
                        raise
                    if attempt == max_retries:
                        logger.error(
                            "Max retries reached for rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            status_code=e.response.status_code,
                        )
                        raise
                    wait_time = min(_wait_time_from_headers(e, delay, func.__name__), max_delay)
                    rate_limit_type = "status"

                logger.warning(
                    f"GitHub rate limit exceeded, waiting {wait_time} seconds",
                    function=func.__name__,
                    rate_limit_type=rate_limit_type,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    wait_time=wait_time,
                )
                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)

        return async_wrapper  # type: ignore

    return decorator
