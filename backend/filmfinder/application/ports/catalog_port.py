from __future__ import annotations

from typing import Any, Mapping, Protocol


class CatalogClientPort(Protocol):
    async def get_json(self, *, params: Mapping[str, str]) -> Any:
        """Issue one GET against the catalog endpoint and return the decoded JSON body.

        The implementation adds its own auth parameters. It raises
        `TransportError` when the exchange fails and `MalformedResponseError`
        when the body is not JSON. HTTP status codes are not interpreted.
        """
        ...

    async def close(self) -> None:
        ...
