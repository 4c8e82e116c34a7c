"""HTTP transport for webinar control requests.

Usage:
    async with HttpxTransport() as transport:
        result = await transport.send(
            RequestDescriptor(method="GET", uri=f"{webcast_url}/layout", headers=headers)
        )
"""

from __future__ import annotations

from typing import Any, Literal, Protocol

import httpx
import orjson
from loguru import logger
from pydantic import BaseModel

from meeting_webinar.config import get_webinar_environ_config

HttpMethod = Literal["GET", "PUT", "PATCH", "DELETE", "POST"]


class RequestDescriptor(BaseModel):
    """Everything the transport needs to issue one request."""

    method: HttpMethod
    uri: str
    headers: dict[str, str] | None = None
    body: Any = None


class Transport(Protocol):
    async def send(self, descriptor: RequestDescriptor) -> Any: ...


class HttpxTransport:
    """Transport backed by a single ``httpx.AsyncClient``.

    Non-2xx responses raise ``httpx.HTTPStatusError``; network failures raise
    the underlying ``httpx`` error. Successful responses are returned as
    decoded JSON, or None when the body is empty.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        if timeout is None:
            timeout = get_webinar_environ_config().WEBINAR_HTTP_TIMEOUT_SECONDS
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(self, descriptor: RequestDescriptor) -> Any:
        headers = dict(descriptor.headers or {})
        content = None
        if descriptor.body is not None:
            content = orjson.dumps(descriptor.body)
            headers.setdefault("Content-Type", "application/json")

        logger.debug(f"{descriptor.method} {descriptor.uri}")
        response = await self._client.request(
            descriptor.method,
            descriptor.uri,
            content=content,
            headers=headers,
        )
        response.raise_for_status()

        if not response.content:
            return None
        if "json" in response.headers.get("content-type", "").lower():
            return response.json()
        return response.text
