"""
OMDb HTTP client.

Async wrapper around the OMDb API (https://www.omdbapi.com/) shared by the
search and detail services. It owns the aiohttp session, adds the API key,
and converts every transport-level failure into the catalog error types so
no raw aiohttp/asyncio exception reaches callers.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Mapping

import aiohttp

from filmfinder.domain import InvalidRequestError, MalformedResponseError, TransportError
from filmfinder.infrastructure.config.settings import OMDB_API_KEY, OMDB_BASE_URL, OMDB_TIMEOUT_S
from filmfinder.infrastructure.utils.log_format import format_kv, preview, redact_params

logger = logging.getLogger(__name__)


class OMDbClient:
    """Async HTTP client for the OMDb API.

    One GET per call, no retries and no caching. The status code is logged but
    not interpreted: OMDb reports most failures as a JSON body with
    `Response: "False"`, and the services decide what that means.

    Attributes:
        _base_url: Endpoint URL (search and detail share it)
        _api_key: Value sent as the `apikey` query parameter
        _timeout_s: Total request timeout, None for the aiohttp default
        _session: aiohttp ClientSession (lazily initialized)
        _lock: Async lock guarding session creation
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout_s: float | None = None,
    ) -> None:
        self._base_url = (base_url or OMDB_BASE_URL or "").strip()
        self._api_key = (api_key or OMDB_API_KEY or "").strip()
        timeout = timeout_s if timeout_s is not None else OMDB_TIMEOUT_S
        self._timeout_s = float(timeout) if timeout else None
        self._session: aiohttp.ClientSession | None = None
        self._lock = asyncio.Lock()
        self._warned_missing_key = False

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is not None and not self._session.closed:
            return self._session

        async with self._lock:
            # Another coroutine may have created it while we waited.
            if self._session is not None and not self._session.closed:
                return self._session

            if self._timeout_s is not None:
                self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self._timeout_s))
            else:
                self._session = aiohttp.ClientSession()
            return self._session

    def _query(self, params: Mapping[str, str]) -> dict[str, str]:
        if not self._api_key and not self._warned_missing_key:
            logger.warning("OMDB_API_KEY is not set; OMDb will answer with an error payload")
            self._warned_missing_key = True
        return {"apikey": self._api_key, **params}

    async def get_json(self, *, params: Mapping[str, str]) -> Any:
        if not self._base_url:
            raise InvalidRequestError("OMDb base URL is not configured")

        query = self._query(params)
        logger.debug(format_kv(event="omdb_request", url=self._base_url, params=redact_params(query)))

        try:
            session = await self._get_session()
            async with session.get(self._base_url, params=query) as resp:
                status = resp.status
                body = await resp.read()
        except aiohttp.InvalidURL as exc:
            raise InvalidRequestError(f"invalid request URL: {exc}") from exc
        except UnicodeError as exc:
            raise InvalidRequestError(f"request cannot be encoded: {exc}") from exc
        except asyncio.TimeoutError as exc:
            logger.error(format_kv(event="omdb_timeout", timeout_s=self._timeout_s, params=redact_params(query)))
            raise TransportError("request timed out", cause=exc) from exc
        except (aiohttp.ClientError, OSError) as exc:
            logger.error(format_kv(event="omdb_transport_error", error=repr(exc), params=redact_params(query)))
            raise TransportError(str(exc) or type(exc).__name__, cause=exc) from exc

        if status >= 400:
            logger.warning(
                format_kv(
                    event="omdb_http_error",
                    status=status,
                    body=preview(body.decode("utf-8", errors="replace")),
                )
            )

        try:
            return json.loads(body)
        except ValueError as exc:
            logger.error(format_kv(event="omdb_malformed_body", status=status, size=len(body)))
            raise MalformedResponseError(f"response is not valid JSON: {exc}") from exc

    async def close(self) -> None:
        """Close the HTTP session; a later call opens a new one."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
