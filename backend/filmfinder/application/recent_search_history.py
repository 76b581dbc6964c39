from __future__ import annotations

import logging
from typing import Optional

from filmfinder.application.observer_context import ObserverContext
from filmfinder.application.ports.key_value_storage_port import KeyValueStoragePort

logger = logging.getLogger(__name__)

RECENT_SEARCHES_KEY = "recentSearches"
RECENT_SEARCHES_LIMIT = 5


class RecentSearchHistory:
    """Most recent search terms, newest first, persisted after every change.

    Only a repeat of the current head is ignored; repeating an older term puts
    a second copy at the front.
    """

    def __init__(
        self,
        *,
        storage: KeyValueStoragePort,
        key: str = RECENT_SEARCHES_KEY,
        limit: int = RECENT_SEARCHES_LIMIT,
        context: Optional[ObserverContext] = None,
    ) -> None:
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        self._storage = storage
        self._key = key
        self._limit = int(limit)
        self._context = context
        self._terms: list[str] = []

    @property
    def terms(self) -> tuple[str, ...]:
        return tuple(self._terms)

    @property
    def limit(self) -> int:
        return self._limit

    def load(self) -> list[str]:
        """Read the persisted terms. Missing or corrupt data reads as no history."""
        self._ensure_context()
        try:
            raw = self._storage.get(self._key)
        except Exception:
            logger.warning("recent searches unreadable; starting empty", exc_info=True)
            raw = None

        if isinstance(raw, list) and all(isinstance(t, str) for t in raw):
            self._terms = list(raw[: self._limit])
        else:
            if raw is not None:
                logger.warning("recent searches slot %r holds %s; ignoring", self._key, type(raw).__name__)
            self._terms = []
        return list(self._terms)

    def record(self, term: str) -> bool:
        """Put `term` at the front. Returns False when it was empty or already the head."""
        self._ensure_context()
        if not term or (self._terms and self._terms[0] == term):
            return False

        self._terms.insert(0, term)
        del self._terms[self._limit :]
        try:
            self._storage.set(self._key, list(self._terms))
        except Exception:
            logger.warning("recent searches save failed (kept in memory)", exc_info=True)
        return True

    def _ensure_context(self) -> None:
        if self._context is not None:
            self._context.ensure_current("recent search history")
