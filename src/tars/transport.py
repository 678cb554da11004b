"""HTTP transport used by providers.

Providers only need "send method + URL + JSON body, get status + body".
``HttpxTransport`` is the default implementation; anything satisfying the
``Transport`` protocol can be injected instead.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from tars.exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of an HTTP response."""

    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Performs a single HTTP exchange."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> TransportResponse:
        """Send the request and return the response, whatever its status.

        Raises:
            TransportError: If no response could be obtained.
        """
        ...


class HttpxTransport:
    """``Transport`` backed by httpx.

    Without an injected ``client`` every request opens and closes its own
    ``httpx.AsyncClient``, so nothing is held between calls. A caller-owned
    client is used as-is and never closed here.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = client
        self._transport = transport

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> TransportResponse:
        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, headers=headers, json=json, timeout=timeout
                )
            else:
                async with httpx.AsyncClient(transport=self._transport) as client:
                    response = await client.request(
                        method, url, headers=headers, json=json, timeout=timeout
                    )
        except httpx.HTTPError as exc:
            logger.debug("http_transport_error | %s %s: %s", method, url, exc)
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        return TransportResponse(status_code=response.status_code, body=response.content)
