from __future__ import annotations

from functools import lru_cache

from pydantic import AnyUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # Supabase: session issuance (GoTrue) and the users document table
    SUPABASE_URL: AnyUrl
    SUPABASE_SERVICE_ROLE_KEY: SecretStr
    USERS_TABLE: str = "users"

    # Chat completion upstream
    OPENAI_API_KEY: SecretStr
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-3.5-turbo-0613"
    OPENAI_TIMEOUT_SECONDS: float = 60.0

    # Rate limit counter store
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_TOKEN: SecretStr | None = None
    RATE_LIMIT_REQUESTS: int = Field(default=5, ge=1)
    RATE_LIMIT_WINDOW_SECONDS: int = Field(default=60, ge=1)
    RATE_LIMIT_PREFIX: str = "ratelimit"

    SESSION_COOKIE_NAME: str = "cheffy-session"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_MAX_AGE_SECONDS: int = 60 * 60 * 24 * 7

    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:8000"],
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
