"""httpx-based transport."""

from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from bunq_client.config.settings import get_settings
from bunq_client.errors import TransportError
from bunq_client.transport.base import Transport, TransportResult


class HttpxTransport(Transport):
    """Sends requests with a shared httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            settings = get_settings()
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout)
            )
        return self._client

    async def execute(
        self,
        method: str,
        url: str,
        headers: Sequence[tuple[str, str]],
        body: bytes,
        options: Mapping[str, Any],
    ) -> TransportResult:
        client = await self._get_client()
        extra: dict[str, Any] = {}
        if "timeout" in options:
            extra["timeout"] = options["timeout"]

        try:
            response = await client.request(
                method.upper(), url, headers=list(headers), content=body, **extra
            )
        except httpx.ConnectError as e:
            raise TransportError(f"Cannot reach {url}: {e}") from e
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {url} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Transport error: {e}") from e

        # headers.raw keeps the server's header casing; the signature covers names as sent
        return TransportResult(
            status=response.status_code,
            headers=[(k.decode("latin-1"), v.decode("latin-1")) for k, v in response.headers.raw],
            body=response.content,
        )

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
