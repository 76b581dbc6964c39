from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from filmfinder.application import (
    DetailService,
    ObserverContext,
    RecentSearchHistory,
    SearchService,
    SearchSession,
    WatchlistStore,
)
from filmfinder.application.ports import CatalogClientPort, KeyValueStoragePort
from filmfinder.infrastructure.config.settings import (
    FILMFINDER_STATE_PATH,
    RECENT_SEARCHES_KEY,
    RECENT_SEARCHES_LIMIT,
    WATCHLIST_PERSIST,
)
from filmfinder.infrastructure.omdb import OMDbClient
from filmfinder.infrastructure.persistence import JsonFileKeyValueStore
from filmfinder.infrastructure.utils.log_format import format_kv

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a front end needs, built once and passed around explicitly."""

    client: CatalogClientPort
    storage: KeyValueStoragePort
    search_service: SearchService
    detail_service: DetailService
    watchlist: WatchlistStore
    history: RecentSearchHistory
    observer: Optional[ObserverContext] = None

    def new_search_session(self, *, discard_stale: bool = False) -> SearchSession:
        return SearchSession(
            search_service=self.search_service,
            history=self.history,
            discard_stale=discard_stale,
        )

    async def close(self) -> None:
        await self.client.close()


def build_app_context(
    *,
    client: Optional[CatalogClientPort] = None,
    storage: Optional[KeyValueStoragePort] = None,
    state_path: Optional[Path] = None,
    observer: Optional[ObserverContext] = None,
    persist_watchlist: Optional[bool] = None,
) -> AppContext:
    """Wire services and stores, then restore persisted state.

    Defaults come from settings: an OMDb client, a JSON state file, and a
    memory-only watchlist unless WATCHLIST_PERSIST is on. When `observer` is
    given, store mutations are confined to its event loop, so call this from
    that loop.
    """
    client = client or OMDbClient()
    storage = storage or JsonFileKeyValueStore(state_path or FILMFINDER_STATE_PATH)
    if persist_watchlist is None:
        persist_watchlist = WATCHLIST_PERSIST

    watchlist = WatchlistStore(context=observer, storage=storage if persist_watchlist else None)
    history = RecentSearchHistory(
        storage=storage,
        key=RECENT_SEARCHES_KEY,
        limit=RECENT_SEARCHES_LIMIT,
        context=observer,
    )
    history.load()
    watchlist.load()

    logger.debug(
        format_kv(
            event="app_context_ready",
            recent_searches=len(history.terms),
            watchlist=len(watchlist),
            persist_watchlist=bool(persist_watchlist),
        )
    )
    return AppContext(
        client=client,
        storage=storage,
        search_service=SearchService(client=client),
        detail_service=DetailService(client=client),
        watchlist=watchlist,
        history=history,
        observer=observer,
    )
