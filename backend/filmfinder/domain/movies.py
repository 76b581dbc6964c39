from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


SearchStatus = Literal["ok", "no_results"]

# Placeholders used when the catalog omits a field on a search hit.
DEFAULT_TITLE = "No Title"
DEFAULT_YEAR = "0000"
DEFAULT_POSTER_URL = ""
DEFAULT_IMDB_ID = "tt-------"


@dataclass(frozen=True)
class MovieSummary:
    """Minimal list-view record for one catalog title (identity is `id`)."""

    id: str
    title: str
    year: str = DEFAULT_YEAR
    poster_url: str = DEFAULT_POSTER_URL


@dataclass(frozen=True)
class SearchPage:
    """One page of keyword search results."""

    query: str
    page: int
    page_count: int
    movies: tuple[MovieSummary, ...] = ()
    status: SearchStatus = "ok"
    # Raw `totalResults` as an int when it parsed, else None.
    total_results: Optional[int] = None
    # Upstream `Error` text for no_results pages (e.g. "Movie not found!").
    message: Optional[str] = None

    @property
    def no_results(self) -> bool:
        return self.status == "no_results"


class MovieDetail(BaseModel):
    """Full catalog record for one title.

    Every field is a string by upstream convention, numeric-looking ones
    included. Decoding is strict: all keys must be present and hold strings.
    Keys the catalog adds beyond these (Ratings, Metascore, DVD, ...) are ignored.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True, extra="ignore")

    title: str = Field(alias="Title")
    year: str = Field(alias="Year")
    rated: str = Field(alias="Rated")
    released: str = Field(alias="Released")
    runtime: str = Field(alias="Runtime")
    genre: str = Field(alias="Genre")
    director: str = Field(alias="Director")
    writer: str = Field(alias="Writer")
    actors: str = Field(alias="Actors")
    plot: str = Field(alias="Plot")
    language: str = Field(alias="Language")
    country: str = Field(alias="Country")
    awards: str = Field(alias="Awards")
    poster_url: str = Field(alias="Poster")
    imdb_rating: str = Field(alias="imdbRating")
    imdb_votes: str = Field(alias="imdbVotes")
    imdb_id: str = Field(alias="imdbID")
    media_type: str = Field(alias="Type")
    response: str = Field(alias="Response")

    @property
    def id(self) -> str:
        return self.imdb_id

    def to_summary(self) -> MovieSummary:
        """Copy the list-view fields, e.g. to like this title from its detail view."""
        return MovieSummary(
            id=self.imdb_id,
            title=self.title,
            year=self.year,
            poster_url=self.poster_url,
        )
