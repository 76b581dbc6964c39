"""
FilmFinder core: headless movie search, details and watchlist client.

Stable public import path is `filmfinder.*`; names below resolve lazily so
that importing the package does not load settings or open HTTP sessions.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

__version__ = "0.1.0"

_LAZY_IMPORTS: Dict[str, Tuple[str, str]] = {
    # ============ Domain ============
    "MovieSummary": ("filmfinder.domain", "MovieSummary"),
    "MovieDetail": ("filmfinder.domain", "MovieDetail"),
    "SearchPage": ("filmfinder.domain", "SearchPage"),
    "CatalogError": ("filmfinder.domain", "CatalogError"),
    "InvalidRequestError": ("filmfinder.domain", "InvalidRequestError"),
    "TransportError": ("filmfinder.domain", "TransportError"),
    "MalformedResponseError": ("filmfinder.domain", "MalformedResponseError"),
    "DecodingError": ("filmfinder.domain", "DecodingError"),
    # ============ Services & stores ============
    "SearchService": ("filmfinder.application", "SearchService"),
    "DetailService": ("filmfinder.application", "DetailService"),
    "WatchlistStore": ("filmfinder.application", "WatchlistStore"),
    "RecentSearchHistory": ("filmfinder.application", "RecentSearchHistory"),
    "SearchSession": ("filmfinder.application", "SearchSession"),
    "ObserverContext": ("filmfinder.application", "ObserverContext"),
    # ============ Wiring ============
    "OMDbClient": ("filmfinder.infrastructure.omdb", "OMDbClient"),
    "AppContext": ("filmfinder.infrastructure.bootstrap", "AppContext"),
    "build_app_context": ("filmfinder.infrastructure.bootstrap", "build_app_context"),
}


def __getattr__(name: str) -> Any:
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_path, attr_name = _LAZY_IMPORTS[name]
    module = import_module(module_path)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> Any:
    return sorted(set(list(globals().keys()) + list(_LAZY_IMPORTS.keys())))


__all__ = sorted(_LAZY_IMPORTS)
