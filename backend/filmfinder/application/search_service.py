from __future__ import annotations

from typing import Any, Mapping, Optional

from filmfinder.application.ports.catalog_port import CatalogClientPort
from filmfinder.domain import (
    DEFAULT_IMDB_ID,
    DEFAULT_POSTER_URL,
    DEFAULT_TITLE,
    DEFAULT_YEAR,
    InvalidRequestError,
    MovieSummary,
    SearchPage,
)

RESULTS_PER_PAGE = 10


def ensure_encodable(value: Any, *, field: str) -> str:
    """Reject values that cannot be sent as a UTF-8 query parameter."""
    if not isinstance(value, str):
        raise InvalidRequestError(f"{field} must be a string, got {type(value).__name__}")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidRequestError(f"{field} cannot be encoded: {exc.reason}") from exc
    return value


def ensure_page(page: Any) -> int:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidRequestError(f"page must be an integer >= 1, got {page!r}")
    return page


def parse_total_results(raw: Any) -> Optional[int]:
    """`totalResults` as a non-negative int, or None when absent/non-numeric."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    if isinstance(raw, str) and raw.isascii() and raw.isdigit():
        return int(raw)
    return None


def page_count_for(total_results: Optional[int]) -> int:
    if total_results is None:
        return 1
    return (total_results + RESULTS_PER_PAGE - 1) // RESULTS_PER_PAGE


def _str_or(item: Mapping[str, Any], key: str, default: str) -> str:
    value = item.get(key)
    return value if isinstance(value, str) else default


def summary_from_search_item(item: Mapping[str, Any]) -> MovieSummary:
    """Map one raw search hit; missing or non-string fields fall back to placeholders."""
    return MovieSummary(
        id=_str_or(item, "imdbID", DEFAULT_IMDB_ID),
        title=_str_or(item, "Title", DEFAULT_TITLE),
        year=_str_or(item, "Year", DEFAULT_YEAR),
        poster_url=_str_or(item, "Poster", DEFAULT_POSTER_URL),
    )


def build_search_page(*, query: str, page: int, payload: Any) -> SearchPage:
    """Turn a decoded search response into a SearchPage.

    A payload without a `Search` array of objects is the catalog's way of saying
    "nothing matched" (or an error payload such as "Too many results."), so it
    becomes a no_results page rather than an error.
    """
    items = payload.get("Search") if isinstance(payload, dict) else None
    if not isinstance(items, list) or not all(isinstance(it, dict) for it in items):
        message = payload.get("Error") if isinstance(payload, dict) else None
        return SearchPage(
            query=query,
            page=page,
            page_count=1,
            status="no_results",
            message=message if isinstance(message, str) else None,
        )

    total = parse_total_results(payload.get("totalResults"))
    return SearchPage(
        query=query,
        page=page,
        page_count=page_count_for(total),
        movies=tuple(summary_from_search_item(it) for it in items),
        status="ok",
        total_results=total,
    )


class SearchService:
    """Paginated keyword search against the catalog (one attempt per call)."""

    def __init__(self, *, client: CatalogClientPort) -> None:
        self._client = client

    async def search(self, query: str, page: int = 1) -> SearchPage:
        query = ensure_encodable(query, field="query")
        page = ensure_page(page)

        payload = await self._client.get_json(params={"s": query, "page": str(page)})
        return build_search_page(query=query, page=page, payload=payload)
