"""
ClientSession - Owns every piece of per-session client state.

Usage:
    async with ClientSession.from_settings(global_settings) as session:
        books = await session.catalog.search("fiction")
        await session.orders.purchase(books[0].item_number)
"""

import httpx
from loguru import logger

from bazar.catalog import CatalogClient
from bazar.orders import OrderClient
from bazar.services.cache import ResponseCache
from bazar.services.failover import FailoverExecutor
from bazar.services.replicas import ReplicaPool
from bazar.services.transport import ReplicaTransport
from bazar.settings import Settings


class ClientSession:
    """Replica pools, response cache and the two service clients for one user session."""

    def __init__(
        self,
        catalog_pool: ReplicaPool,
        order_pool: ReplicaPool,
        transport: ReplicaTransport,
        cache: ResponseCache | None = None,
    ):
        self.cache = cache if cache is not None else ResponseCache()
        self.transport = transport
        self.catalog = CatalogClient(
            catalog_pool, FailoverExecutor(transport), self.cache
        )
        self.orders = OrderClient(order_pool, transport, self.catalog, self.cache)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ClientSession":
        """Build a session from settings; http_transport lets tests stub the network."""
        return cls(
            catalog_pool=ReplicaPool("catalog", settings.catalog_replicas),
            order_pool=ReplicaPool("order", settings.order_replicas),
            transport=ReplicaTransport(
                timeout=settings.request_timeout, http_transport=http_transport
            ),
        )

    async def close(self) -> None:
        """Release the HTTP client. The cache dies with the session."""
        await self.transport.close()
        logger.debug(f"Session closed, cache stats: {self.cache.get_stats().to_dict()}")
        self.cache.clear()

    async def __aenter__(self) -> "ClientSession":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
