# src/app/main.py
from __future__ import annotations

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.app.config import settings
from src.app.deps import create_supabase
from src.app.infra.counters.redis_store import RedisCounterStore, create_redis_client
from src.app.routers.auth import router as auth_router
from src.app.routers.chat import router as chat_router
from src.app.routers.pages import router as pages_router
from src.app.routers.recipes import router as recipes_router
from src.app.services.completion_proxy import CompletionProxy
from src.app.services.rate_limiter import FixedWindowRateLimiter
from src.services.openai_client import OpenAIChatClient

# Plain stdout logging (fine for dev and containers)
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

app = FastAPI(title="CheffyAI API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router)
app.include_router(recipes_router)
app.include_router(auth_router)
app.include_router(pages_router)


@app.on_event("startup")
async def startup() -> None:
    app.state.supabase = create_supabase(settings)

    token = settings.REDIS_TOKEN.get_secret_value() if settings.REDIS_TOKEN else None
    app.state.counter_store = RedisCounterStore(create_redis_client(settings.REDIS_URL, token))
    limiter = FixedWindowRateLimiter(
        app.state.counter_store,
        limit=settings.RATE_LIMIT_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        prefix=settings.RATE_LIMIT_PREFIX,
    )

    app.state.completion_client = OpenAIChatClient(
        api_key=settings.OPENAI_API_KEY.get_secret_value(),
        base_url=settings.OPENAI_BASE_URL,
        timeout=settings.OPENAI_TIMEOUT_SECONDS,
    )
    app.state.completion_proxy = CompletionProxy(
        app.state.completion_client,
        limiter,
        model=settings.OPENAI_MODEL,
    )
    logger.info(
        "Startup complete: env=%s, rate_limit=%d/%ds",
        settings.APP_ENV,
        settings.RATE_LIMIT_REQUESTS,
        settings.RATE_LIMIT_WINDOW_SECONDS,
    )


@app.on_event("shutdown")
async def shutdown() -> None:
    client = getattr(app.state, "completion_client", None)
    if client is not None:
        await client.aclose()
    store = getattr(app.state, "counter_store", None)
    if store is not None:
        await store.close()


@app.get("/health")
def health():
    return {"ok": True}
