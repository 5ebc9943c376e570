"""
OrderClient - Purchases with post-purchase cache invalidation.

A purchase goes to exactly one order replica (round-robin), never to a
second one on failure, so an order cannot be placed twice.
"""

from urllib.parse import quote

from loguru import logger

from bazar.catalog import CatalogClient
from bazar.models import Confirmation, parse_confirmation
from bazar.services.cache import INFO, SEARCH, ResponseCache, cache_key
from bazar.services.errors import ServiceError
from bazar.services.replicas import ReplicaPool
from bazar.services.transport import ReplicaTransport


class OrderClient:
    """
    Places orders and keeps the catalog cache honest afterwards.

    Usage:
        confirmation = await orders.purchase(42)
        # info:42 and search:<topic of 42> are gone from the cache
    """

    def __init__(
        self,
        pool: ReplicaPool,
        transport: ReplicaTransport,
        catalog: CatalogClient,
        cache: ResponseCache,
    ):
        self._pool = pool
        self._transport = transport
        self._catalog = catalog
        self._cache = cache
        self.last_origin: str | None = None

    @property
    def pool(self) -> ReplicaPool:
        return self._pool

    async def purchase(self, item_number: int) -> Confirmation:
        """
        Buy one copy of a book.

        Raises:
            ServiceError: The order replica could not complete the purchase.
                The cache is left untouched in that case.
        """
        address = self._pool.select_next()
        payload = await self._transport.request(
            "POST",
            address,
            f"/purchase/{quote(str(item_number), safe='')}",
            service_id=self._pool.service_id,
        )
        self.last_origin = address
        confirmation = parse_confirmation(item_number, payload)
        logger.info(f"Purchase of #{item_number} confirmed by {address}")

        await self._invalidate_after_purchase(item_number)
        return confirmation

    async def _invalidate_after_purchase(self, item_number: int) -> None:
        self._cache.invalidate(cache_key(INFO, item_number))

        # The topic is only known to the catalog; an uncached lookup keeps info:<n> absent.
        try:
            book = await self._catalog.fetch_info(item_number)
        except ServiceError as e:
            logger.warning(
                f"Could not look up topic of #{item_number} after purchase, "
                f"search results for it may be stale: {e}"
            )
            return

        self._cache.invalidate(cache_key(SEARCH, book.topic))
