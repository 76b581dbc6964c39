from filmfinder.application.detail_service import DetailService, decode_movie_detail
from filmfinder.application.observer_context import ObserverContext
from filmfinder.application.recent_search_history import RecentSearchHistory
from filmfinder.application.search_service import SearchService, build_search_page, summary_from_search_item
from filmfinder.application.search_session import SearchSession
from filmfinder.application.status_messages import describe_error, describe_page
from filmfinder.application.watchlist_store import WatchlistStore

__all__ = [
    "DetailService",
    "ObserverContext",
    "RecentSearchHistory",
    "SearchService",
    "SearchSession",
    "WatchlistStore",
    "build_search_page",
    "decode_movie_detail",
    "describe_error",
    "describe_page",
    "summary_from_search_item",
]
