"""On-visible callback abstraction used to trigger incremental loading.

A host that renders the listing (a terminal pager, a TUI, a web page bridge)
provides a `VisibilityObserver`. The listing view registers the last rendered
user as the sentinel and is called back when the host reports it visible.
"""

from itertools import count
from typing import Callable, Hashable, Protocol

import structlog

logger = structlog.get_logger(__name__)

VisibleCallback = Callable[[], None]


class VisibilitySubscription(Protocol):
    """Handle for one registration with a visibility observer."""

    def disconnect(self) -> None:
        """Stop watching the sentinel. Calling this more than once is a no-op."""
        ...


class VisibilityObserver(Protocol):
    """Watches sentinels and calls back when one becomes visible."""

    def observe(self, sentinel: Hashable, callback: VisibleCallback) -> VisibilitySubscription:
        """Register `callback` to run whenever `sentinel` becomes visible."""
        ...


class _ManualSubscription:
    def __init__(self, observer: "ManualVisibilityObserver", key: int) -> None:
        self._observer = observer
        self._key = key

    def disconnect(self) -> None:
        self._observer._subscriptions.pop(self._key, None)


class ManualVisibilityObserver:
    """Visibility observer driven explicitly by the host through `reveal`."""

    def __init__(self) -> None:
        """Initialize the observer with no registrations."""
        self._subscriptions: dict[int, tuple[Hashable, VisibleCallback]] = {}
        self._keys = count()

    @property
    def active_subscriptions(self) -> int:
        """Number of registrations currently being watched."""
        return len(self._subscriptions)

    def observe(self, sentinel: Hashable, callback: VisibleCallback) -> VisibilitySubscription:
        """Register `callback` to run whenever `sentinel` is revealed."""
        key = next(self._keys)
        self._subscriptions[key] = (sentinel, callback)
        return _ManualSubscription(self, key)

    def reveal(self, sentinel: Hashable) -> int:
        """Report `sentinel` as visible, returning how many callbacks ran."""
        callbacks = [callback for watched, callback in self._subscriptions.values() if watched == sentinel]
        logger.debug("Sentinel revealed", sentinel=sentinel, callbacks=len(callbacks))
        for callback in callbacks:
            callback()
        return len(callbacks)
