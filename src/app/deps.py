# src/app/deps.py (singletons are built at startup and exposed as dependencies)

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client, create_client

from src.app.config import Settings, get_settings
from src.app.domain.models import Authenticated, SessionResult, Unauthenticated
from src.app.infra.db.base import UserRepository
from src.app.infra.db.supabase_users_repo import SupabaseUserRepository
from src.app.services.account_service import AccountService
from src.app.services.completion_proxy import CompletionProxy
from src.app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

auth_scheme = HTTPBearer(auto_error=False)


def create_supabase(settings: Settings) -> Client:
    return create_client(
        str(settings.SUPABASE_URL),
        settings.SUPABASE_SERVICE_ROLE_KEY.get_secret_value(),
    )


def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} is not initialized yet.")
    return value


def get_supabase(request: Request) -> Client:
    return _from_state(request, "supabase")


def get_completion_proxy(request: Request) -> CompletionProxy:
    return _from_state(request, "completion_proxy")


def get_user_repository(
    supa: Client = Depends(get_supabase),
    settings: Settings = Depends(get_settings),
) -> UserRepository:
    return SupabaseUserRepository(supa, table_name=settings.USERS_TABLE)


def get_recipe_service(repo: UserRepository = Depends(get_user_repository)) -> RecipeService:
    return RecipeService(repo)


def get_account_service(
    supa: Client = Depends(get_supabase),
    repo: UserRepository = Depends(get_user_repository),
) -> AccountService:
    return AccountService(supa, repo)


def _session_token(
    request: Request,
    cred: HTTPAuthorizationCredentials | None,
    cookie_name: str,
) -> str | None:
    if cred is not None and cred.scheme.lower() == "bearer" and cred.credentials:
        return cred.credentials
    return request.cookies.get(cookie_name) or None


async def resolve_session(
    request: Request,
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    supa: Client = Depends(get_supabase),
    settings: Settings = Depends(get_settings),
) -> SessionResult:
    """
    Resolve the caller from Authorization: Bearer <access_token> or the
    session cookie, validated against Supabase Auth. Never raises.
    """
    token = _session_token(request, cred, settings.SESSION_COOKIE_NAME)
    if not token:
        return Unauthenticated("missing session")

    try:
        res = supa.auth.get_user(token)
        user = res.user if res else None
    except Exception as exc:
        logger.info("Session rejected: %s", exc)
        return Unauthenticated("invalid or expired session")

    if not user:
        return Unauthenticated("invalid session")

    name = None
    meta = getattr(user, "user_metadata", None) or {}
    if isinstance(meta, dict):
        name = meta.get("name")

    return Authenticated(user_id=str(user.id), email=user.email, name=name)


async def get_current_user(session: SessionResult = Depends(resolve_session)) -> Authenticated:
    if not isinstance(session, Authenticated):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return session
