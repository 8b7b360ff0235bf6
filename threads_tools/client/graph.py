"""Thin async HTTP client for Meta Graph-style APIs.

Authenticates with an ``access_token`` parameter, returns parsed JSON bodies and
raises ``httpx.HTTPStatusError`` on any non-2xx status. No retries, no backoff:
callers see transport failures exactly as httpx reports them.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Literal, Mapping

import httpx

_log = logging.getLogger(__name__)

Method = Literal["GET", "POST"]


def _encode_params(params: Mapping[str, Any] | None, access_token: str) -> dict[str, str | int | float]:
    """Drop unset values and render booleans the way the Graph API expects."""
    encoded: dict[str, str | int | float] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, Enum):
            encoded[key] = value.value
        else:
            encoded[key] = value
    encoded["access_token"] = access_token
    return encoded


class GraphClient:
    """Wraps one ``httpx.AsyncClient``; pass ``transport`` to stub the network in tests."""

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def request(
        self,
        method: Method,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        *,
        base_url: str,
        access_token: str,
    ) -> Any:
        """Send one request. GET params go in the query string, POST params in a form body."""
        url = f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        payload = _encode_params(params, access_token)
        _log.debug("%s %s", method, endpoint)

        if method == "GET":
            resp = await self._http.get(url, params=payload)
        elif method == "POST":
            resp = await self._http.post(url, data=payload)
        else:
            raise ValueError(f"Unsupported method: {method}")

        resp.raise_for_status()
        if not resp.content:
            return {}
        return resp.json()

    async def get(self, endpoint: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        return await self.request("GET", endpoint, params, **kwargs)

    async def post(self, endpoint: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        return await self.request("POST", endpoint, params, **kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> GraphClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
