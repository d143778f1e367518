from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import MagicMock

from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from src.app.config import get_settings
from src.app.deps import resolve_session
from src.app.domain.models import Authenticated, Unauthenticated


def _request(cookie: str | None = None) -> Request:
    headers = []
    if cookie is not None:
        headers.append((b"cookie", f"{get_settings().SESSION_COOKIE_NAME}={cookie}".encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def _supa(user=None, error: Exception | None = None) -> MagicMock:
    supa = MagicMock()
    if error is not None:
        supa.auth.get_user.side_effect = error
    else:
        supa.auth.get_user.return_value = SimpleNamespace(user=user)
    return supa


AUTH_USER = SimpleNamespace(id="user-1", email="cook@example.com", user_metadata={"name": "Cook"})


class TestResolveSession:
    def test_no_token_is_unauthenticated(self) -> None:
        supa = _supa(AUTH_USER)

        result = asyncio.run(resolve_session(_request(), None, supa, get_settings()))

        assert isinstance(result, Unauthenticated)
        supa.auth.get_user.assert_not_called()

    def test_cookie_token_resolves_user(self) -> None:
        supa = _supa(AUTH_USER)

        result = asyncio.run(resolve_session(_request("tok"), None, supa, get_settings()))

        assert result == Authenticated(user_id="user-1", email="cook@example.com", name="Cook")
        supa.auth.get_user.assert_called_once_with("tok")

    def test_bearer_header_wins_over_cookie(self) -> None:
        supa = _supa(AUTH_USER)
        cred = HTTPAuthorizationCredentials(scheme="Bearer", credentials="bearer-tok")

        asyncio.run(resolve_session(_request("cookie-tok"), cred, supa, get_settings()))

        supa.auth.get_user.assert_called_once_with("bearer-tok")

    def test_rejected_token_is_unauthenticated(self) -> None:
        supa = _supa(error=RuntimeError("JWT expired"))

        result = asyncio.run(resolve_session(_request("old"), None, supa, get_settings()))

        assert isinstance(result, Unauthenticated)

    def test_missing_user_is_unauthenticated(self) -> None:
        result = asyncio.run(resolve_session(_request("tok"), None, _supa(None), get_settings()))

        assert isinstance(result, Unauthenticated)
