# src/app/services/account_service.py
"""
Account flows backed by Supabase Auth plus the `users` profile document.
"""
from __future__ import annotations

import logging
from typing import Optional

from supabase import Client

from src.app.constants import COUNTRY_OPTIONS, LANGUAGE_OPTIONS
from src.app.domain.errors import (
    CredentialUpdateError,
    InvalidProfileError,
    RecipeStoreError,
    SignupError,
)
from src.app.domain.models import Authenticated, User
from src.app.infra.db.base import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def validate_language(language: str) -> str:
    if language not in LANGUAGE_OPTIONS:
        raise InvalidProfileError("language", language)
    return language


def validate_country(country: str) -> str:
    if country not in COUNTRY_OPTIONS:
        raise InvalidProfileError("country", country)
    return country


class AccountService:
    def __init__(self, supa: Client, users: UserRepository):
        self._supa = supa
        self._users = users

    def signup(
        self,
        full_name: str,
        email: str,
        password: str,
        language: str,
        country: str,
    ) -> User:
        """
        Create the auth identity and its profile document.

        Raises:
            InvalidProfileError: Unknown language or country
            SignupError: Email taken, weak password, or auth failure
            RecipeStoreError: Profile row could not be written. The auth user
                is removed again so the email can sign up later
        """
        validate_language(language)
        validate_country(country)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise SignupError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self._users.get_by_email(email) is not None:
            raise SignupError("User already exists")

        try:
            res = self._supa.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"name": full_name}},
                }
            )
        except Exception as exc:
            logger.warning("Auth sign up failed for %s: %s", email, exc)
            raise SignupError(str(exc)) from exc

        auth_user = getattr(res, "user", None)
        user = User(
            id=str(auth_user.id) if auth_user else None,
            email=email,
            name=full_name,
            language=language,
            country=country,
        )
        try:
            return self._users.create_user(user)
        except RecipeStoreError:
            if auth_user is not None:
                self._remove_auth_user(str(auth_user.id))
            raise

    def _remove_auth_user(self, user_id: str) -> None:
        try:
            self._supa.auth.admin.delete_user(user_id)
            logger.info("Removed auth user %s after profile creation failed", user_id)
        except Exception as exc:
            logger.error("Could not remove auth user %s: %s", user_id, exc)

    def sign_in(self, email: str, password: str) -> Optional[str]:
        """Return a session access token, or None when credentials are rejected."""
        try:
            res = self._supa.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:
            logger.info("Sign in rejected for %s: %s", email, exc)
            return None

        session = getattr(res, "session", None)
        return session.access_token if session else None

    def update_settings(
        self,
        user: Authenticated,
        name: Optional[str] = None,
        language: Optional[str] = None,
        country: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        if language:
            validate_language(language)
        if country:
            validate_country(country)

        if password:
            if len(password) < MIN_PASSWORD_LENGTH:
                raise InvalidProfileError("password", "too short")
            try:
                self._supa.auth.admin.update_user_by_id(user.user_id, {"password": password})
            except Exception as exc:
                logger.warning("Password update failed for %s: %s", user.identity, exc)
                raise CredentialUpdateError(str(exc)) from exc
            logger.info("Password updated for %s", user.identity)

        return self._users.update_profile(
            user.identity,
            name=name or None,
            language=language or None,
            country=country or None,
        )
