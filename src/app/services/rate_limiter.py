# src/app/services/rate_limiter.py
"""
Fixed-window rate limiting.
Each caller gets `limit` actions per `window_seconds`; the window is aligned
to multiples of its length, so every caller's quota refills at the same
boundary.
"""
from __future__ import annotations

import logging
import time
from typing import Callable

from src.app.domain.models import RateLimitResult
from src.app.infra.counters.base import CounterStore

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
DEFAULT_WINDOW_SECONDS = 60


class FixedWindowRateLimiter:
    """
    Responsibilities:
    - Count one action per check against the caller's current window
    - Report the remaining quota and when the window resets
    """

    def __init__(
        self,
        store: CounterStore,
        limit: int = DEFAULT_LIMIT,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
        prefix: str = "ratelimit",
        clock: Callable[[], float] = time.time,
    ):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")
        self._store = store
        self.limit = limit
        self.window_ms = window_seconds * 1000
        self.prefix = prefix
        self._clock = clock

    def _bucket(self, now_ms: int) -> int:
        return now_ms // self.window_ms

    def key_for(self, identity: str, bucket: int) -> str:
        return f"{self.prefix}:{identity}:{bucket}"

    async def check(self, identity: str) -> RateLimitResult:
        """
        Consume one unit of `identity`'s quota.

        Not idempotent: the unit is spent whether or not the caller goes on
        to do the work.

        Raises:
            RateLimiterUnavailableError: If the counter store fails
        """
        if not identity:
            raise ValueError("identity is required")

        now_ms = int(self._clock() * 1000)
        bucket = self._bucket(now_ms)
        count = await self._store.increment(self.key_for(identity, bucket), self.window_ms)

        result = RateLimitResult(
            allowed=count <= self.limit,
            limit=self.limit,
            remaining=max(0, self.limit - count),
            reset_at=(bucket + 1) * self.window_ms,
        )

        if not result.allowed:
            logger.info("Rate limit exceeded: identity=%s, count=%d, limit=%d", identity, count, self.limit)

        return result
