"""Cancellable timer used to coalesce rapid input into a single action."""

import asyncio
from typing import Any, Awaitable, Callable

import structlog

logger = structlog.get_logger(__name__)


class Debouncer:
    """Runs an async action once input has paused for `delay` seconds.

    Every call to `schedule` cancels the pending timer and starts a new one, so
    at most one action is pending at any time. An action that has already
    started is left to finish; callers that need to ignore its outcome must
    do so themselves.
    """

    def __init__(self, delay: float, action: Callable[..., Awaitable[Any]]) -> None:
        """Initialize the debouncer with its delay in seconds and the action to run."""
        self.delay = delay
        self.action = action
        self._handle: asyncio.TimerHandle | None = None
        self._pending_args: tuple[Any, ...] = ()
        self._running: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> bool:
        """Whether an action is scheduled but has not started yet."""
        return self._handle is not None

    def schedule(self, *args: Any) -> None:
        """Schedule the action with `args`, replacing any pending schedule."""
        self.cancel()
        self._pending_args = args
        self._handle = asyncio.get_running_loop().call_later(self.delay, self._fire)

    def cancel(self) -> bool:
        """Cancel the pending action, returning whether one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._pending_args = ()
        return True

    def _fire(self) -> asyncio.Task[Any]:
        args = self._pending_args
        self._handle = None
        self._pending_args = ()
        task = asyncio.ensure_future(self.action(*args))
        self._running.add(task)
        task.add_done_callback(self._running.discard)
        return task

    async def flush(self) -> None:
        """Run the pending action now, then wait for every started action to finish."""
        if self._handle is not None:
            self._handle.cancel()
            self._fire()
        while self._running:
            await asyncio.gather(*self._running)

    def close(self) -> None:
        """Cancel the pending action and any action still running."""
        self.cancel()
        for task in list(self._running):
            task.cancel()
        self._running.clear()
