"""
CatalogClient - Cached, failover-backed reads against the catalog service.
"""

from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

from loguru import logger
from pydantic import ValidationError

from bazar.models import BookDetail, BookSummary, parse_book_detail, parse_search_results
from bazar.services.cache import INFO, SEARCH, ResponseCache, cache_key
from bazar.services.errors import InvalidPayloadError
from bazar.services.failover import FailoverExecutor, FatalError
from bazar.services.replicas import ReplicaPool

T = TypeVar("T")

_MISSING = object()


class CatalogClient:
    """
    Topic search and item lookup with a process-lifetime cache.

    A cache hit returns without any network call. A miss runs a failover scan
    over the catalog pool and caches the parsed answer only if a replica
    answered with a well-formed payload.

    Usage:
        books = await catalog.search("distributed systems")
        book = await catalog.info(1)
        catalog.last_origin  # replica that served the last call, None on a hit
    """

    def __init__(
        self,
        pool: ReplicaPool,
        executor: FailoverExecutor,
        cache: ResponseCache,
    ):
        self._pool = pool
        self._executor = executor
        self._cache = cache
        self.last_origin: str | None = None

    @property
    def pool(self) -> ReplicaPool:
        return self._pool

    async def search(self, topic: str) -> list[BookSummary]:
        """Books filed under topic, in the order the catalog returned them."""
        return await self._cached(
            cache_key(SEARCH, topic),
            f"/search/{quote(topic, safe='')}",
            parse_search_results,
        )

    async def info(self, item_number: int | str) -> BookDetail:
        """Details for one book."""
        return await self._cached(
            cache_key(INFO, item_number),
            f"/info/{quote(str(item_number), safe='')}",
            parse_book_detail,
        )

    async def fetch_info(self, item_number: int | str) -> BookDetail:
        """Details for one book straight from the replicas; the cache is not read or written."""
        return await self._fetch(
            f"/info/{quote(str(item_number), safe='')}", parse_book_detail
        )

    async def _cached(self, key: str, path: str, parse: Callable[[Any], T]) -> T:
        cached = self._cache.get(key, _MISSING)
        if cached is not _MISSING:
            self.last_origin = None
            return cached

        result = await self._fetch(path, parse)
        self._cache.set(key, result)
        return result

    async def _fetch(self, path: str, parse: Callable[[Any], T]) -> T:
        outcome = await self._executor.execute(self._pool, path)
        if isinstance(outcome, FatalError):
            raise outcome.error

        try:
            result = parse(outcome.data)
        except (ValidationError, TypeError, AttributeError) as e:
            logger.error(f"Malformed catalog answer for {path} from {outcome.address}: {e}")
            raise InvalidPayloadError(
                outcome.address,
                path,
                (str(e).splitlines() or [type(e).__name__])[0],
                self._pool.service_id,
            ) from e

        self.last_origin = outcome.address
        logger.debug(f"Catalog answer for {path} from {outcome.address}")
        return result
