from filmfinder.domain.errors import (
    CatalogError,
    DecodingError,
    InvalidRequestError,
    MalformedResponseError,
    TransportError,
)
from filmfinder.domain.movies import (
    DEFAULT_IMDB_ID,
    DEFAULT_POSTER_URL,
    DEFAULT_TITLE,
    DEFAULT_YEAR,
    MovieDetail,
    MovieSummary,
    SearchPage,
    SearchStatus,
)

__all__ = [
    "CatalogError",
    "DecodingError",
    "InvalidRequestError",
    "MalformedResponseError",
    "TransportError",
    "DEFAULT_IMDB_ID",
    "DEFAULT_POSTER_URL",
    "DEFAULT_TITLE",
    "DEFAULT_YEAR",
    "MovieDetail",
    "MovieSummary",
    "SearchPage",
    "SearchStatus",
]
