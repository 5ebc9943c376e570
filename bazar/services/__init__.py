"""
Service layer infrastructure - resilience patterns for replicated backends.

Provides:
- ReplicaPool: Replica addresses with a round-robin cursor
- ResponseCache: Process-lifetime response cache with explicit invalidation
- FailoverExecutor: Full-pool failover scan that skips not-found replicas
- ReplicaTransport: Async HTTP access mapped onto typed errors
"""

from bazar.services.errors import (
    ServiceError,
    TransportError,
    RequestTimeoutError,
    ServiceStatusError,
    NotFoundError,
    NotFoundOnAllReplicasError,
    InvalidPayloadError,
)
from bazar.services.cache import ResponseCache, CacheEntry, CacheStats, cache_key
from bazar.services.replicas import ReplicaPool
from bazar.services.transport import ReplicaTransport
from bazar.services.failover import (
    FailoverExecutor,
    FatalError,
    NotFoundSkip,
    RequestOutcome,
    Success,
)

__all__ = [
    # Errors
    "ServiceError",
    "TransportError",
    "RequestTimeoutError",
    "ServiceStatusError",
    "NotFoundError",
    "NotFoundOnAllReplicasError",
    "InvalidPayloadError",
    # Cache
    "ResponseCache",
    "CacheEntry",
    "CacheStats",
    "cache_key",
    # Replicas
    "ReplicaPool",
    # Transport
    "ReplicaTransport",
    # Failover
    "FailoverExecutor",
    "RequestOutcome",
    "Success",
    "NotFoundSkip",
    "FatalError",
]
