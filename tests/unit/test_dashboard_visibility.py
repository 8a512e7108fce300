"""Unit tests for the ManualVisibilityObserver."""

from unittest.mock import MagicMock

from github_users_dashboard.dashboard.visibility import ManualVisibilityObserver


def test_reveal_calls_matching_callbacks_only() -> None:
    """Test that revealing a sentinel runs only the callbacks registered for it."""
    observer = ManualVisibilityObserver()
    first, second = MagicMock(), MagicMock()
    observer.observe("a", first)
    observer.observe("b", second)

    assert observer.reveal("a") == 1

    first.assert_called_once_with()
    second.assert_not_called()


def test_disconnect_stops_callbacks() -> None:
    """Test that a disconnected registration is no longer called and disconnect is idempotent."""
    observer = ManualVisibilityObserver()
    callback = MagicMock()
    subscription = observer.observe("a", callback)

    subscription.disconnect()
    subscription.disconnect()

    assert observer.active_subscriptions == 0
    assert observer.reveal("a") == 0
    callback.assert_not_called()
