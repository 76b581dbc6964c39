from __future__ import annotations

from filmfinder.domain import (
    CatalogError,
    DecodingError,
    InvalidRequestError,
    MalformedResponseError,
    SearchPage,
)

IDLE_TEXT = "Start searching to get started!"
NO_RESULTS_TEXT = "No results found! Please refine your search."


def describe_page(page: SearchPage) -> str:
    if page.no_results:
        return NO_RESULTS_TEXT
    return f"Found {page.total_results or 0} movies."


def describe_error(exc: CatalogError) -> str:
    """One-line status for a failed catalog call."""
    if isinstance(exc, InvalidRequestError):
        return "Invalid URL"
    if isinstance(exc, MalformedResponseError):
        return f"JSON parsing error: {exc.message}"
    if isinstance(exc, DecodingError):
        return f"Decoding error: {exc.message}"
    return f"Error: {exc.message}"
