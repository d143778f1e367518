# src/app/services/completion_proxy.py
"""
Rate-limited proxy for recipe chat completions.
Shapes every outcome into a status code, JSON body and quota headers so the
HTTP route and the chat page share one code path.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from src.app.domain.errors import RateLimiterUnavailableError
from src.app.domain.models import Authenticated, RateLimitResult, SessionResult
from src.app.services.rate_limiter import FixedWindowRateLimiter
from src.services.errors import UpstreamUnavailableError
from src.services.prompt import build_completion_envelope

logger = logging.getLogger(__name__)

RATE_LIMITED_TEXT = (
    "You're sending messages too fast! I have to power off for a bit. "
    "Come back in a few minutes!"
)
UNAUTHORIZED_BODY = "Unauthorized"


class CompletionClient(Protocol):
    async def create_chat_completion(self, envelope: dict[str, Any]) -> dict[str, Any]:
        ...


@dataclass
class ProxyResponse:
    status_code: int
    body: Any
    headers: dict[str, str] = field(default_factory=dict)
    rate_limit: Optional[RateLimitResult] = None

    @property
    def rate_limited(self) -> bool:
        return self.rate_limit is not None and not self.rate_limit.allowed


class CompletionProxy:
    """
    Responsibilities:
    - Reject callers without a session before any other work
    - Spend one unit of the caller's quota, then call upstream only if allowed
    - Relay the upstream JSON as-is alongside the rate limit state
    """

    def __init__(
        self,
        client: CompletionClient,
        limiter: FixedWindowRateLimiter,
        model: str,
    ):
        self._client = client
        self._limiter = limiter
        self.model = model

    async def handle(
        self,
        session: SessionResult,
        prompt: str,
        language: str | None = None,
    ) -> ProxyResponse:
        if not isinstance(session, Authenticated):
            return ProxyResponse(status_code=401, body=UNAUTHORIZED_BODY)

        envelope = build_completion_envelope(prompt, language, self.model)

        try:
            result = await self._limiter.check(session.identity)
        except RateLimiterUnavailableError as exc:
            logger.error("Rate limiter unavailable: %s", exc)
            return ProxyResponse(
                status_code=503,
                body={"error": "rate_limiter_unavailable", "detail": str(exc)},
            )

        headers = result.headers()
        state = result.to_state()

        if not result.allowed:
            return ProxyResponse(
                status_code=200,
                body={"json": {"text": RATE_LIMITED_TEXT}, "rateLimitState": state},
                headers=headers,
                rate_limit=result,
            )

        try:
            upstream = await self._client.create_chat_completion(envelope)
        except UpstreamUnavailableError as exc:
            logger.warning("Completion upstream failed for %s: %s", session.identity, exc)
            return ProxyResponse(
                status_code=502,
                body={
                    "error": "upstream_unavailable",
                    "detail": exc.reason,
                    "rateLimitState": state,
                },
                headers=headers,
                rate_limit=result,
            )

        return ProxyResponse(
            status_code=200,
            body={"json": upstream, "rateLimitState": state},
            headers=headers,
            rate_limit=result,
        )
