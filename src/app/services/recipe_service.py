# src/app/services/recipe_service.py
"""
Saved recipe operations on top of the user document store.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from src.app.domain.errors import UserNotFoundError
from src.app.domain.models import Recipe, User
from src.app.infra.db.base import UserRepository

logger = logging.getLogger(__name__)


def _clean_ingredients(ingredients: Iterable[str] | str | None) -> list[str]:
    if ingredients is None:
        return []
    if isinstance(ingredients, str):
        ingredients = [ingredients]
    return [item.strip() for item in ingredients if item and item.strip()]


class RecipeService:
    def __init__(self, repository: UserRepository):
        self._repo = repository

    def save_recipe(
        self,
        email: str,
        title: str,
        description: str,
        ingredients: Iterable[str] | str | None,
        instructions: str,
        timestamp: Optional[int] = None,
    ) -> User:
        """
        Append a new recipe to the user's collection.
        No deduplication: saving the same recipe twice stores it twice.

        Raises:
            UserNotFoundError: If no user matches `email`
            RecipeStoreError: If the store rejects the write
        """
        recipe = Recipe(
            title=title,
            description=description,
            ingredients=_clean_ingredients(ingredients),
            instructions=instructions,
            timestamp=timestamp,
        )
        return self._repo.append_recipe(email, recipe)

    def list_recipes(self, email: str, newest_first: bool = False) -> list[Recipe]:
        user = self._repo.get_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        if newest_first:
            return list(reversed(user.recipes))
        return list(user.recipes)
