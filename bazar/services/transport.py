"""
ReplicaTransport - Async HTTP access to a single replica address.

Maps httpx outcomes onto the client error taxonomy:
- 2xx: decoded JSON body
- 404: NotFoundError
- other non-2xx: ServiceStatusError
- timeout: RequestTimeoutError
- any other request failure: TransportError
"""

from typing import Any

import httpx
from loguru import logger

from bazar.services.errors import (
    NotFoundError,
    RequestTimeoutError,
    ServiceStatusError,
    TransportError,
)


def _error_detail(response: httpx.Response) -> str:
    """Pull a short, human readable reason out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return (response.text or "")[:200]

    if isinstance(body, dict):
        for field in ("message", "error", "detail"):
            if body.get(field):
                return str(body[field])
    return str(body)[:200]


class ReplicaTransport:
    """
    Thin wrapper around a lazily created httpx.AsyncClient.

    Usage:
        async with ReplicaTransport(timeout=5.0) as transport:
            data = await transport.request("GET", "http://catalog-1:3001", "/info/1")
    """

    def __init__(
        self,
        timeout: float = 5.0,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._timeout = timeout
        self._http_transport = http_transport
        self._http_client: httpx.AsyncClient | None = None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._http_transport,
            )
        return self._http_client

    async def request(
        self,
        method: str,
        address: str,
        path: str,
        service_id: str | None = None,
    ) -> Any:
        """
        Send one request to one replica.

        Args:
            method: HTTP method (GET, POST)
            address: Replica base URL
            path: Request path, already URL-quoted
            service_id: Logical service name, attached to raised errors

        Returns:
            Decoded JSON body (None for an empty body)

        Raises:
            NotFoundError: Replica answered 404
            ServiceStatusError: Replica answered another non-success status
            RequestTimeoutError: No answer within the timeout
            TransportError: Connection or protocol failure
        """
        client = await self._get_http_client()
        url = f"{address}{path}"

        try:
            response = await client.request(method=method, url=url)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(address, self._timeout, service_id) from e
        except httpx.RequestError as e:
            raise TransportError(
                address, str(e) or type(e).__name__, service_id
            ) from e

        if response.status_code == 404:
            raise NotFoundError(address, _error_detail(response), service_id)
        if not response.is_success:
            raise ServiceStatusError(
                address, response.status_code, _error_detail(response), service_id
            )

        logger.debug(f"{method} {url} -> {response.status_code}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ServiceStatusError(
                address, response.status_code, "response is not valid JSON", service_id
            ) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("ReplicaTransport closed")

    async def __aenter__(self) -> "ReplicaTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
