# src/app/infra/counters/base.py
"""
Abstract counter store used by the rate limiter.
Implementations must make increment-and-expire atomic per key.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class CounterStore(ABC):
    """
    Implementations:
    - RedisCounterStore: hosted Redis (SET NX PX + INCR)
    """

    @abstractmethod
    async def increment(self, key: str, ttl_ms: int) -> int:
        """
        Increment the counter at `key` and return the new value.
        The key expires `ttl_ms` after its first increment.
        """
        pass

    async def close(self) -> None:
        return None
