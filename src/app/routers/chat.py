# src/app/routers/chat.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.app.deps import get_completion_proxy, resolve_session
from src.app.domain.models import Authenticated, SessionResult
from src.app.schemas.chat import ChatGptRequest, ChatGptResponse
from src.app.services.completion_proxy import UNAUTHORIZED_BODY, CompletionProxy

router = APIRouter(prefix="/api", tags=["chat"])


@router.post(
    "/chatGpt",
    responses={
        200: {"model": ChatGptResponse},
        401: {"description": "No valid session"},
        422: {"description": "Blank prompt"},
        502: {"description": "Completion upstream unavailable"},
        503: {"description": "Rate limit counter store unavailable"},
    },
)
async def chat_gpt(
    payload: Optional[ChatGptRequest] = None,
    session: SessionResult = Depends(resolve_session),
    proxy: CompletionProxy = Depends(get_completion_proxy),
) -> JSONResponse:
    if not isinstance(session, Authenticated):
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=UNAUTHORIZED_BODY)

    payload = payload or ChatGptRequest()
    if not payload.prompt.strip():
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": "Prompt cannot be empty."},
        )

    # Quota exhaustion still answers 200 so the chat shows a bubble, not an error
    result = await proxy.handle(session, payload.prompt, payload.language)
    return JSONResponse(
        status_code=result.status_code,
        content=result.body,
        headers=result.headers,
    )
