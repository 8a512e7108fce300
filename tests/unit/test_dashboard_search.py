"""Unit tests for the SearchController."""

import asyncio
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from githubkit.exception import RequestError, RequestFailed

from github_users_dashboard.dashboard.search import SearchController
from github_users_dashboard.dashboard.state import ListingState
from github_users_dashboard.schemas.users import UserSummary


@pytest.fixture
def populated_state(make_users: Callable[[int, int], list[UserSummary]]) -> ListingState:
    """A listing state with an accumulated listing of users 1-30."""
    return ListingState(users=make_users(1, 30), page=1, initialized=True)


@pytest.mark.asyncio
async def test_burst_of_edits_issues_one_search_with_final_query(source: MagicMock, populated_state: ListingState) -> None:
    """Test that rapid edits within the debounce window issue a single request for the last value."""
    controller = SearchController(source, populated_state, debounce_seconds=0.05)

    for text in ("t", "to", "tor", "torvalds"):
        controller.set_query(text)
    assert source.search_users.await_count == 0

    await asyncio.sleep(0.2)
    await controller.flush()

    source.search_users.assert_awaited_once_with("torvalds")


@pytest.mark.asyncio
async def test_pause_between_edits_issues_one_search_per_pause(source: MagicMock, populated_state: ListingState) -> None:
    """Test that each pause in typing issues its own request."""
    controller = SearchController(source, populated_state, debounce_seconds=0.02)

    controller.set_query("linus")
    await asyncio.sleep(0.1)
    controller.set_query("linus torvalds")
    await asyncio.sleep(0.1)
    await controller.flush()

    assert [c.args[0] for c in source.search_users.await_args_list] == ["linus", "linus torvalds"]


@pytest.mark.asyncio
async def test_search_result_replaces_display_but_not_listing(
    source: MagicMock, populated_state: ListingState, make_users: Callable[[int, int], list[UserSummary]]
) -> None:
    """Test that a completed search shows exactly its results and leaves the accumulated listing untouched."""
    torvalds = UserSummary(id=1024025, login="torvalds", avatar_url="https://avatars.githubusercontent.com/u/1024025", html_url="https://github.com/torvalds")
    source.search_users = AsyncMock(return_value=[torvalds])
    listing_before = list(populated_state.users)
    controller = SearchController(source, populated_state, debounce_seconds=0.5)

    controller.set_query("torvalds")
    await controller.flush()

    assert populated_state.displayed_users == [torvalds]
    assert populated_state.search_active is True
    assert populated_state.is_searching is False
    assert populated_state.users == listing_before


@pytest.mark.asyncio
async def test_blank_query_restores_listing_without_request(source: MagicMock, populated_state: ListingState) -> None:
    """Test that a whitespace-only query leaves search mode immediately and issues nothing."""
    source.search_users = AsyncMock(return_value=[])
    controller = SearchController(source, populated_state, debounce_seconds=0.01)
    controller.set_query("octo")
    await controller.flush()
    assert populated_state.search_active is True

    controller.set_query("   ")

    assert populated_state.search_active is False
    assert populated_state.search_results == []
    assert populated_state.displayed_users == populated_state.users
    assert controller.pending is False
    assert source.search_users.await_count == 1


@pytest.mark.asyncio
async def test_clear_restores_exact_listing(
    source: MagicMock, populated_state: ListingState, make_users: Callable[[int, int], list[UserSummary]]
) -> None:
    """Test that clearing restores the accumulated listing that existed before searching."""
    listing_before = list(populated_state.users)
    source.search_users = AsyncMock(return_value=make_users(900, 905))
    controller = SearchController(source, populated_state, debounce_seconds=0.01)

    controller.set_query("someone")
    await controller.flush()
    populated_state.error = "stale error"
    controller.clear()

    assert populated_state.query == ""
    assert populated_state.displayed_users == listing_before
    assert populated_state.search_results == []
    assert populated_state.error is None


@pytest.mark.asyncio
async def test_clear_cancels_pending_search(source: MagicMock, populated_state: ListingState) -> None:
    """Test that clearing before the debounce elapses issues no request."""
    controller = SearchController(source, populated_state, debounce_seconds=0.05)

    controller.set_query("octocat")
    assert controller.pending is True
    controller.clear()
    await asyncio.sleep(0.1)

    assert source.search_users.await_count == 0


@pytest.mark.asyncio
async def test_no_items_is_not_an_error(source: MagicMock, populated_state: ListingState) -> None:
    """Test that an empty result set shows no users and sets no error."""
    source.search_users = AsyncMock(return_value=[])
    controller = SearchController(source, populated_state)

    await controller.search("nobody-by-this-name")

    assert populated_state.search_active is True
    assert populated_state.displayed_users == []
    assert populated_state.error is None


@pytest.mark.asyncio
async def test_failure_keeps_last_successful_results(
    source: MagicMock,
    populated_state: ListingState,
    make_users: Callable[[int, int], list[UserSummary]],
    failed_response: Callable[..., MagicMock],
) -> None:
    """Test that a failed search keeps the previous results on screen and sets the error."""
    previous = make_users(500, 502)
    source.search_users = AsyncMock(side_effect=[previous, RequestFailed(failed_response(503))])
    controller = SearchController(source, populated_state)
    populated_state.query = "abc"

    await controller.search("abc")
    populated_state.query = "abcd"
    await controller.search("abcd")

    assert populated_state.error == "HTTP error! status: 503"
    assert populated_state.displayed_users == previous
    assert populated_state.is_searching is False


@pytest.mark.asyncio
async def test_failure_with_empty_query_falls_back_to_listing(source: MagicMock, populated_state: ListingState) -> None:
    """Test that a failed search shows the accumulated listing when the query is empty."""
    source.search_users = AsyncMock(side_effect=RequestError("Network is unreachable"))
    populated_state.search_active = True
    controller = SearchController(source, populated_state)

    await controller.search("abc")

    assert populated_state.error == "Network is unreachable"
    assert populated_state.search_active is False
    assert populated_state.displayed_users == populated_state.users


@pytest.mark.asyncio
async def test_stale_search_response_is_discarded(
    source: MagicMock, populated_state: ListingState, make_users: Callable[[int, int], list[UserSummary]]
) -> None:
    """Test that an older search resolving after a newer one does not overwrite the newer results."""
    gate = asyncio.Event()
    older_results = make_users(100, 101)
    newer_results = make_users(200, 201)

    async def search_users(query: str) -> list[UserSummary]:
        if query == "old":
            await gate.wait()
            return older_results
        return newer_results

    source.search_users = AsyncMock(side_effect=search_users)
    controller = SearchController(source, populated_state)

    older = asyncio.create_task(controller.search("old"))
    await asyncio.sleep(0)
    await controller.search("new")
    gate.set()
    await older

    assert populated_state.search_results == newer_results
    assert populated_state.is_searching is False


@pytest.mark.asyncio
async def test_clear_discards_in_flight_search(
    source: MagicMock, populated_state: ListingState, make_users: Callable[[int, int], list[UserSummary]]
) -> None:
    """Test that results arriving after the query was cleared are ignored."""
    gate = asyncio.Event()

    async def search_users(query: str) -> list[UserSummary]:
        await gate.wait()
        return make_users(700, 701)

    source.search_users = AsyncMock(side_effect=search_users)
    controller = SearchController(source, populated_state)

    in_flight = asyncio.create_task(controller.search("late"))
    await asyncio.sleep(0)
    controller.clear()
    gate.set()
    await in_flight

    assert populated_state.search_active is False
    assert populated_state.search_results == []
    assert populated_state.displayed_users == populated_state.users


@pytest.mark.asyncio
async def test_unparseable_search_response_sets_error(source: MagicMock, populated_state: ListingState) -> None:
    """Test that a search response that fails validation is reported and clears the searching flag."""

    async def search_users(query: str) -> list[UserSummary]:
        return [UserSummary.model_validate({"id": "not-a-number", "login": query})]

    source.search_users = AsyncMock(side_effect=search_users)
    populated_state.query = "abc"
    controller = SearchController(source, populated_state)

    await controller.search("abc")

    assert populated_state.is_searching is False
    assert populated_state.error == "Failed to search users"
    assert populated_state.displayed_users == populated_state.users
