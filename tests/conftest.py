"""
Shared fixtures.

Replicas are simulated with httpx.MockTransport: every request is recorded and
answered from a route table keyed by (method, replica base URL, path).
"""

from typing import Any

import httpx
import pytest

from bazar.services.replicas import ReplicaPool
from bazar.services.transport import ReplicaTransport
from bazar.session import ClientSession

CATALOG_1 = "http://catalog-1:3001"
CATALOG_2 = "http://catalog-2:3002"
CATALOG_3 = "http://catalog-3:3005"
ORDER_1 = "http://order-1:3003"
ORDER_2 = "http://order-2:3004"


class FakeReplicas:
    """Route table standing in for every backend replica."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []
        self._routes: dict[tuple[str, str, str], Any] = {}

    def add(
        self,
        method: str,
        base: str,
        path: str,
        status: int = 200,
        json: Any = None,
        exc: type[httpx.RequestError] | None = None,
    ) -> None:
        """Register an answer; exc makes the replica fail at the transport level instead."""
        self._routes[(method, base, path)] = (status, json, exc)

    def calls_to(self, base: str) -> list[tuple[str, str]]:
        return [(method, path) for method, b, path in self.calls if b == base]

    def handler(self, request: httpx.Request) -> httpx.Response:
        base = f"{request.url.scheme}://{request.url.host}:{request.url.port}"
        key = (request.method, base, request.url.path)
        self.calls.append(key)

        status, body, exc = self._routes.get(key, (404, {"error": "not_found"}, None))
        if exc is not None:
            raise exc("simulated failure", request=request)
        return httpx.Response(status, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def replicas() -> FakeReplicas:
    return FakeReplicas()


@pytest.fixture
def replica_transport(replicas: FakeReplicas) -> ReplicaTransport:
    return ReplicaTransport(timeout=1.0, http_transport=replicas.transport())


@pytest.fixture
def catalog_pool() -> ReplicaPool:
    return ReplicaPool("catalog", [CATALOG_1, CATALOG_2, CATALOG_3])


@pytest.fixture
def order_pool() -> ReplicaPool:
    return ReplicaPool("order", [ORDER_1, ORDER_2])


@pytest.fixture
def session(
    catalog_pool: ReplicaPool,
    order_pool: ReplicaPool,
    replica_transport: ReplicaTransport,
) -> ClientSession:
    return ClientSession(catalog_pool, order_pool, replica_transport)
