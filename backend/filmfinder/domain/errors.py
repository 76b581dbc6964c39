from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for every failure a catalog call can surface to callers."""

    kind = "catalog_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(CatalogError):
    """The request could not be built (bad page number, unencodable text)."""

    kind = "invalid_request"


class TransportError(CatalogError):
    """The HTTP exchange itself failed (DNS, refused connection, timeout, reset)."""

    kind = "transport_error"

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)


class MalformedResponseError(CatalogError):
    """The response body is not valid JSON."""

    kind = "malformed_response"


class DecodingError(CatalogError):
    """Valid JSON that does not have the shape of a detail record."""

    kind = "decoding_error"

    def __init__(self, message: str, *, errors: Optional[list[str]] = None) -> None:
        self.errors = list(errors or [])
        super().__init__(message)
