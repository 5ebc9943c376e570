"""
FailoverExecutor - Full-pool failover scan for read requests.

Replicas are tried in their configured order (never the round-robin cursor):
- Success: returned at once, remaining replicas are not contacted
- NotFoundSkip: the resource may live on another replica, keep scanning
- FatalError: any other failure aborts the scan and is surfaced as-is

A scan where every replica skipped ends in FatalError(NotFoundOnAllReplicasError).
"""

from dataclasses import dataclass
from typing import Any

from loguru import logger

from bazar.services.errors import (
    NotFoundError,
    NotFoundOnAllReplicasError,
    ServiceError,
)
from bazar.services.replicas import ReplicaPool
from bazar.services.transport import ReplicaTransport


@dataclass(frozen=True)
class Success:
    """A replica answered; data is its decoded payload."""

    data: Any
    address: str


@dataclass(frozen=True)
class NotFoundSkip:
    """A replica answered 404; try the next one."""

    address: str


@dataclass(frozen=True)
class FatalError:
    """A failure that ends the scan."""

    error: ServiceError


RequestOutcome = Success | NotFoundSkip | FatalError


class FailoverExecutor:
    """
    Issues one logical GET against a pool, replica by replica.

    Usage:
        executor = FailoverExecutor(transport)
        outcome = await executor.execute(catalog_pool, "/search/fiction")
        if isinstance(outcome, Success):
            print(outcome.data, "from", outcome.address)
    """

    def __init__(self, transport: ReplicaTransport):
        self._transport = transport

    async def attempt(
        self, address: str, path: str, service_id: str | None = None
    ) -> RequestOutcome:
        """Try a single replica and classify the result."""
        try:
            data = await self._transport.request("GET", address, path, service_id)
        except NotFoundError:
            return NotFoundSkip(address)
        except ServiceError as e:
            return FatalError(e)
        return Success(data, address)

    async def execute(self, pool: ReplicaPool, path: str) -> RequestOutcome:
        """Scan the pool in configured order until one replica answers."""
        for address in pool.addresses:
            outcome = await self.attempt(address, path, pool.service_id)

            if isinstance(outcome, Success):
                logger.info(f"[{pool.service_id}] {path} served by {address}")
                return outcome

            if isinstance(outcome, FatalError):
                logger.error(f"[{pool.service_id}] {path} failed: {outcome.error}")
                return outcome

            logger.warning(
                f"[{pool.service_id}] {path} not found on {address}, trying next replica"
            )

        return FatalError(
            NotFoundOnAllReplicasError(path, len(pool), service_id=pool.service_id)
        )
