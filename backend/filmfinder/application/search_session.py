from __future__ import annotations

import logging
from typing import Optional

from filmfinder.application.recent_search_history import RecentSearchHistory
from filmfinder.application.search_service import SearchService, ensure_encodable, ensure_page
from filmfinder.application.status_messages import IDLE_TEXT, describe_error, describe_page
from filmfinder.domain import CatalogError, InvalidRequestError, MovieSummary, SearchPage

logger = logging.getLogger(__name__)


class SearchSession:
    """State behind a search screen: current query, page, results and status line.

    Responses are applied in the order they resolve, so with two requests in
    flight the slower one wins. `discard_stale=True` tags every request with a
    sequence number and drops a response once a newer request has been issued.
    """

    def __init__(
        self,
        *,
        search_service: SearchService,
        history: Optional[RecentSearchHistory] = None,
        discard_stale: bool = False,
    ) -> None:
        self._search = search_service
        self._history = history
        self._discard_stale = bool(discard_stale)
        self._issued = 0

        self.query = ""
        self.current_page = 1
        self.page_count = 1
        self.movies: tuple[MovieSummary, ...] = ()
        self.status_text = IDLE_TEXT
        self.last_error: Optional[CatalogError] = None
        self.last_page: Optional[SearchPage] = None

    @property
    def can_go_previous(self) -> bool:
        return self.current_page > 1

    @property
    def can_go_next(self) -> bool:
        return self.current_page < self.page_count

    async def submit(self, query: str) -> Optional[SearchPage]:
        """Start a new search from page 1."""
        self.query = query
        self.current_page = 1
        return await self._run()

    async def open_page(self, query: str, page: int) -> Optional[SearchPage]:
        """Jump straight to `page` of `query` (e.g. restoring a screen)."""
        self.query = query
        self.current_page = page
        return await self._run()

    async def next_page(self) -> Optional[SearchPage]:
        if not self.can_go_next:
            return None
        self.current_page += 1
        return await self._run()

    async def previous_page(self) -> Optional[SearchPage]:
        if not self.can_go_previous:
            return None
        self.current_page -= 1
        return await self._run()

    async def _run(self) -> Optional[SearchPage]:
        self._issued += 1
        seq = self._issued
        query, page = self.query, self.current_page

        # Requests that can never be sent are not search history.
        try:
            ensure_encodable(query, field="query")
            ensure_page(page)
        except InvalidRequestError as exc:
            self._fail(exc)
            return None

        if self._history is not None:
            self._history.record(query)

        try:
            result = await self._search.search(query, page)
        except CatalogError as exc:
            if self._is_stale(seq):
                logger.debug("dropping stale search failure seq=%s query=%r page=%s", seq, query, page)
                return None
            self._fail(exc)
            return None

        if self._is_stale(seq):
            logger.debug("dropping stale search page seq=%s query=%r page=%s", seq, query, page)
            return None

        self.last_error = None
        self.last_page = result
        self.status_text = describe_page(result)
        if result.no_results:
            self.movies = ()
            self.page_count = 1
        else:
            self.movies = result.movies
            self.page_count = result.page_count
        return result

    def _is_stale(self, seq: int) -> bool:
        return self._discard_stale and seq != self._issued

    def _fail(self, exc: CatalogError) -> None:
        self.last_error = exc
        self.status_text = describe_error(exc)
