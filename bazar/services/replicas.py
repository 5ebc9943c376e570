"""
ReplicaPool - Ordered set of interchangeable endpoints for one logical service.

Two selection policies draw from the same address list:
- select_next(): round-robin cursor, for load balancing without retry
- iteration / addresses: fixed configured order, for failover scans
"""

from collections.abc import Iterator, Sequence

from loguru import logger


class ReplicaPool:
    """
    Replica addresses for a single service plus a round-robin cursor.

    Usage:
        pool = ReplicaPool("order", ["http://order-1:3003", "http://order-2:3004"])
        pool.select_next()  # -> "http://order-2:3004" (moves before reading)
        list(pool)          # -> configured order, cursor untouched
    """

    def __init__(self, service_id: str, addresses: Sequence[str]):
        if not addresses:
            raise ValueError(f"Replica pool '{service_id}' needs at least one address")
        self.service_id = service_id
        self._addresses = tuple(a.rstrip("/") for a in addresses)
        self._cursor = 0

    @property
    def addresses(self) -> tuple[str, ...]:
        return self._addresses

    @property
    def cursor(self) -> int:
        return self._cursor

    def select_next(self) -> str:
        """Advance the cursor one position, then return the address there."""
        self._cursor = (self._cursor + 1) % len(self._addresses)
        address = self._addresses[self._cursor]
        logger.debug(f"[{self.service_id}] round-robin selected {address}")
        return address

    def __iter__(self) -> Iterator[str]:
        return iter(self._addresses)

    def __len__(self) -> int:
        return len(self._addresses)

    def __repr__(self) -> str:
        return f"ReplicaPool({self.service_id!r}, {list(self._addresses)!r})"
