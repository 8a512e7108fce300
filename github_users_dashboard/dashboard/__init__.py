"""Listing and detail views of the GitHub users dashboard."""

from .debounce import Debouncer
from .detail import DetailFetcher, render_user_detail
from .listing import ListingView, render_listing
from .pagination import PaginationController, merge_unique_users
from .search import SearchController
from .state import ListingState
from .visibility import ManualVisibilityObserver, VisibilityObserver, VisibilitySubscription

__all__ = [
    "Debouncer",
    "DetailFetcher",
    "ListingState",
    "ListingView",
    "ManualVisibilityObserver",
    "PaginationController",
    "SearchController",
    "VisibilityObserver",
    "VisibilitySubscription",
    "merge_unique_users",
    "render_listing",
    "render_user_detail",
]
