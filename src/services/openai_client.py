from __future__ import annotations

import logging
from typing import Any

import httpx

from src.services.errors import (
    CompletionConfigurationError,
    NetworkTimeoutError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "chat/completions"


class OpenAIChatClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise CompletionConfigurationError("Missing OpenAI API key.")
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self._client = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )

    async def create_chat_completion(self, envelope: dict[str, Any]) -> dict[str, Any]:
        """
        Send the envelope and return the upstream JSON body untouched.

        Raises:
            UpstreamUnavailableError: On transport errors, non-2xx status,
                or a body that is not JSON
        """
        try:
            response = await self._client.post(CHAT_COMPLETIONS_PATH, json=envelope)
        except httpx.TimeoutException as error:
            logger.error("Completion request timed out: %s", error)
            raise NetworkTimeoutError(self.base_url + CHAT_COMPLETIONS_PATH, self.timeout) from error
        except httpx.HTTPError as error:
            logger.error("Completion request failed: %s", error)
            raise UpstreamUnavailableError(str(error)) from error

        if response.is_error:
            logger.error(
                "Completion upstream returned %d: %s",
                response.status_code,
                response.text[:500],
            )
            raise UpstreamUnavailableError(
                f"upstream returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as error:
            raise UpstreamUnavailableError("upstream returned a non-JSON body") from error

    async def aclose(self) -> None:
        await self._client.aclose()
