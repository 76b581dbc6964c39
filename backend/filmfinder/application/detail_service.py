from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from filmfinder.application.ports.catalog_port import CatalogClientPort
from filmfinder.application.search_service import ensure_encodable
from filmfinder.domain import DecodingError, MovieDetail


def decode_movie_detail(payload: Any) -> MovieDetail:
    """Strictly decode a detail response.

    The check is structural only: a payload with `Response: "False"` still
    decodes when every field is present.
    """
    if not isinstance(payload, dict):
        raise DecodingError(f"expected a JSON object, got {type(payload).__name__}")
    try:
        return MovieDetail.model_validate(payload)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        ]
        raise DecodingError(f"detail payload has {len(errors)} invalid field(s)", errors=errors) from exc


class DetailService:
    """Fetches one title's full record by its IMDb id. No caching."""

    def __init__(self, *, client: CatalogClientPort) -> None:
        self._client = client

    async def get_details(self, imdb_id: str) -> MovieDetail:
        imdb_id = ensure_encodable(imdb_id, field="imdb_id")
        payload = await self._client.get_json(params={"i": imdb_id})
        return decode_movie_detail(payload)
