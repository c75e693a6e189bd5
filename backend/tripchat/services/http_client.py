"""Shared async HTTP plumbing for the travel-data provider clients."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Anything a provider call can throw once the request is on the wire or the
# body is being picked apart. Caught at each provider boundary and turned
# into an Err result.
PROVIDER_EXCEPTIONS = (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError, AttributeError)


class ProviderClient:
    """Base adapter holding one lazily created httpx.AsyncClient."""

    name = "provider"

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url
        self._timeout = timeout
        self._headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def _get_json(self, path: str, params: dict | None = None) -> dict[str, Any]:
        client = await self._get_client()
        resp = await client.get(path, params=params)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError(f"{self.name} returned a {type(data).__name__} body, expected a JSON object")
        return data

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None
