from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ChatGptRequest(BaseModel):
    # Blank prompts are rejected by the route once the session is known
    prompt: str = ""
    language: Optional[str] = None


class RateLimitState(BaseModel):
    success: bool
    limit: int
    remaining: int
    reset: int


class ChatGptResponse(BaseModel):
    json_: dict[str, Any] = Field(..., alias="json")
    rateLimitState: RateLimitState
