from __future__ import annotations

import logging
import time
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import Client

from src.app.domain.errors import RecipeStoreError, UserNotFoundError
from src.app.domain.models import Recipe, User
from src.app.infra.db.base import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "English"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _safe_str(value: object) -> str | None:
    return str(value) if value else None


def _row_to_user(row: dict[str, Any]) -> User:
    recipes = row.get("recipes") or []
    return User(
        id=_safe_str(row.get("id")),
        email=str(row["email"]),
        name=_safe_str(row.get("name")),
        language=str(row.get("language") or DEFAULT_LANGUAGE),
        country=_safe_str(row.get("country")),
        recipes=[Recipe.from_document(item) for item in recipes if isinstance(item, dict)],
    )


class SupabaseUserRepository(UserRepository):
    TABLE_NAME = "users"

    def __init__(self, client: Client, table_name: str | None = None):
        self._client = client
        self.table_name = table_name or self.TABLE_NAME

    def _table(self):
        return self._client.table(self.table_name)

    def _fetch_row(self, email: str) -> Optional[dict[str, Any]]:
        try:
            result = self._table().select("*").eq("email", email).limit(1).execute()
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error fetching user %s: %s", email, error)
            raise RecipeStoreError("get_by_email", str(error)) from error

        if not result.data:
            return None
        return result.data[0]

    def get_by_email(self, email: str) -> Optional[User]:
        row = self._fetch_row(email)
        return _row_to_user(row) if row else None

    def append_recipe(self, email: str, recipe: Recipe) -> User:
        row = self._fetch_row(email)
        if row is None:
            raise UserNotFoundError(email)

        if recipe.timestamp is None:
            recipe.timestamp = _now_ms()

        # Read-modify-write: concurrent saves for one user are last-write-wins
        recipes = list(row.get("recipes") or [])
        recipes.append(recipe.to_document())

        try:
            result = (
                self._table()
                .update({"recipes": recipes})
                .eq("email", email)
                .execute()
            )
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error saving recipe for %s: %s", email, error)
            raise RecipeStoreError("append_recipe", str(error)) from error

        if not result.data:
            raise UserNotFoundError(email)

        logger.info("Saved recipe for %s: total=%d", email, len(recipes))
        return _row_to_user(result.data[0])

    def create_user(self, user: User) -> User:
        data = user.to_document()
        if not data.get("id"):
            data.pop("id")

        try:
            result = self._table().insert(data).execute()
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error creating user %s: %s", user.email, error)
            raise RecipeStoreError("create_user", str(error)) from error

        if not result.data:
            raise RecipeStoreError("create_user", "insert returned no rows")

        logger.info("Created user document for %s", user.email)
        return _row_to_user(result.data[0])

    def update_profile(
        self,
        email: str,
        name: Optional[str] = None,
        language: Optional[str] = None,
        country: Optional[str] = None,
    ) -> User:
        changes = {
            key: value
            for key, value in {"name": name, "language": language, "country": country}.items()
            if value is not None
        }
        if not changes:
            user = self.get_by_email(email)
            if user is None:
                raise UserNotFoundError(email)
            return user

        try:
            result = self._table().update(changes).eq("email", email).execute()
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error updating profile for %s: %s", email, error)
            raise RecipeStoreError("update_profile", str(error)) from error

        if not result.data:
            raise UserNotFoundError(email)
        return _row_to_user(result.data[0])
