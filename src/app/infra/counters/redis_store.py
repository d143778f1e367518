from __future__ import annotations

import logging

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from src.app.domain.errors import RateLimiterUnavailableError
from src.app.infra.counters.base import CounterStore

logger = logging.getLogger(__name__)


def create_redis_client(url: str, token: str | None = None) -> aioredis.Redis:
    return aioredis.from_url(url, password=token or None, decode_responses=True)


class RedisCounterStore(CounterStore):
    def __init__(self, client: aioredis.Redis):
        self._client = client
        logger.info("RedisCounterStore initialized")

    async def increment(self, key: str, ttl_ms: int) -> int:
        try:
            # SET NX seeds the key and its expiry on the first hit of a window
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.set(key, 0, px=ttl_ms, nx=True)
                pipe.incr(key)
                _, count = await pipe.execute()

            return int(count)
        except RedisError as error:
            logger.error("Counter store error for key %s: %s", key, error)
            raise RateLimiterUnavailableError(str(error)) from error

    async def close(self) -> None:
        await self._client.aclose()
