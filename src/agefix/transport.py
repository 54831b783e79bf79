"""
HTTP transport for the AgeFix ledger service.

The client depends on the HttpTransport protocol, not on httpx, so the
HTTP layer can be replaced by a fake in tests without touching the
request/response logic.

Every failure surfaces as TransportError: connection errors, malformed
endpoint URLs and timeouts carry the underlying message, non-2xx responses carry the service's own
``error`` (or ``message``) field verbatim.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)


@runtime_checkable
class HttpTransport(Protocol):
    """Async JSON transport bound to one service endpoint."""

    async def post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON body to ``path`` and return the parsed response.

        Raises:
            TransportError: On any transport or remote failure.
        """
        ...

    async def get_json(self, path: str) -> dict[str, Any]:
        """GET ``path`` and return the parsed response.

        Raises:
            TransportError: On any transport or remote failure.
        """
        ...


class HttpxTransport:
    """Default transport using httpx.AsyncClient.

    A client is opened per request, so there is no pool to manage and
    no state shared between concurrent calls.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {"Content-Type": "application/json", **(headers or {})}

    @property
    def base_url(self) -> str:
        return self._base_url

    async def post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", path, payload)

    async def get_json(self, path: str) -> dict[str, Any]:
        return await self._request("GET", path, None)

    async def _request(
        self, method: str, path: str, payload: Optional[dict[str, Any]]
    ) -> dict[str, Any]:
        url = self._base_url + path
        logger.debug("%s %s", method, url)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, headers=self._headers) as client:
                response = await client.request(method, url, json=payload)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request timed out after {self._timeout}s: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Request failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.debug("%s %s -> %d: %s", method, url, response.status_code, message)
            raise TransportError(message, status_code=response.status_code)

        try:
            # parse_float keeps fractional amounts exact
            data = response.json(parse_float=Decimal)
        except ValueError as exc:
            raise TransportError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(data, dict):
            raise TransportError(f"Unexpected response type: {type(data).__name__}")
        return data


def _error_message(response: httpx.Response) -> str:
    """Extract the service's error message from a failed response."""
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        body = None

    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and value.get("message"):
                return str(value["message"])

    text = response.text.strip()
    if text and body is None:
        return f"HTTP {response.status_code}: {text}"
    return f"HTTP {response.status_code}"
