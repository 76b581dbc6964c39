from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Callable, Iterator, Optional

from filmfinder.application.observer_context import ObserverContext
from filmfinder.application.ports.key_value_storage_port import KeyValueStoragePort
from filmfinder.domain import MovieSummary

logger = logging.getLogger(__name__)

WatchlistListener = Callable[[tuple[MovieSummary, ...]], None]

WATCHLIST_STORAGE_KEY = "watchlist"


def _summary_from_stored(raw: Any) -> Optional[MovieSummary]:
    if not isinstance(raw, dict):
        return None
    fields = {k: raw.get(k) for k in ("id", "title", "year", "poster_url")}
    if not all(isinstance(v, str) for v in fields.values()):
        return None
    return MovieSummary(**fields)


class WatchlistStore:
    """Liked movies: an insertion-ordered set keyed by `MovieSummary.id`.

    Listeners are called synchronously, in subscription order, after every call
    that changes the list; calls that change nothing notify nobody. Pollers can
    compare `version` instead of subscribing.

    Without `storage` the list lives in memory only. With it, `load()` restores
    the saved list and every change is written back under `storage_key`.
    """

    def __init__(
        self,
        *,
        context: Optional[ObserverContext] = None,
        storage: Optional[KeyValueStoragePort] = None,
        storage_key: str = WATCHLIST_STORAGE_KEY,
    ) -> None:
        self._context = context
        self._storage = storage
        self._storage_key = storage_key
        self._entries: list[MovieSummary] = []
        self._listeners: list[WatchlistListener] = []
        self._version = 0

    @property
    def entries(self) -> tuple[MovieSummary, ...]:
        return tuple(self._entries)

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MovieSummary]:
        return iter(self.entries)

    def contains(self, movie_id: str) -> bool:
        return any(m.id == movie_id for m in self._entries)

    def add(self, movie: MovieSummary) -> bool:
        """Append `movie` unless its id is already liked. Returns True when added."""
        self._ensure_context()
        if self.contains(movie.id):
            return False
        self._entries.append(movie)
        self._changed()
        return True

    def remove(self, movie: MovieSummary) -> bool:
        """Drop every entry with `movie.id`. Returns True when something was removed."""
        self._ensure_context()
        kept = [m for m in self._entries if m.id != movie.id]
        if len(kept) == len(self._entries):
            return False
        self._entries = kept
        self._changed()
        return True

    def toggle(self, movie: MovieSummary) -> bool:
        """Like/unlike switch. Returns the liked state after the call."""
        if self.contains(movie.id):
            self.remove(movie)
            return False
        self.add(movie)
        return True

    def subscribe(self, listener: WatchlistListener) -> Callable[[], None]:
        """Register `listener`; the returned callable unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def load(self) -> tuple[MovieSummary, ...]:
        """Restore the saved list (no-op without storage). Unreadable data reads as empty."""
        if self._storage is None:
            return self.entries
        self._ensure_context()
        try:
            raw = self._storage.get(self._storage_key)
        except Exception:
            logger.warning("watchlist restore failed; starting empty", exc_info=True)
            raw = None

        restored: list[MovieSummary] = []
        for item in raw if isinstance(raw, list) else []:
            movie = _summary_from_stored(item)
            if movie is not None and all(m.id != movie.id for m in restored):
                restored.append(movie)

        if restored != self._entries:
            self._entries = restored
            self._changed(persist=False)
        return self.entries

    def _ensure_context(self) -> None:
        if self._context is not None:
            self._context.ensure_current("watchlist")

    def _changed(self, *, persist: bool = True) -> None:
        self._version += 1
        if persist and self._storage is not None:
            try:
                self._storage.set(self._storage_key, [asdict(m) for m in self._entries])
            except Exception:
                logger.warning("watchlist save failed (kept in memory)", exc_info=True)

        snapshot = self.entries
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                # One broken observer must not stop the others.
                logger.exception("watchlist listener %r failed", listener)
