# src/app/infra/db/base.py
"""
Abstract base class for the user document store.
This interface allows swapping the hosted store in tests and deployments.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from src.app.domain.models import Recipe, User


class UserRepository(ABC):
    """
    Abstract interface for user document operations.

    Implementations:
    - SupabaseUserRepository: `users` table with a JSON `recipes` column
    """

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user document by email.

        Returns:
            The user, or None if no document matches
        """
        pass

    @abstractmethod
    def append_recipe(self, email: str, recipe: Recipe) -> User:
        """
        Append a recipe to the matching user's collection, creating the
        collection if absent. Never creates a user.

        Args:
            email: Identity of the owning user
            recipe: The recipe to append

        Returns:
            The updated user document

        Raises:
            UserNotFoundError: If no user matches `email`
            RecipeStoreError: If the store rejects the write
        """
        pass

    @abstractmethod
    def create_user(self, user: User) -> User:
        """
        Insert a new user document.

        Raises:
            RecipeStoreError: If the store rejects the write
        """
        pass

    @abstractmethod
    def update_profile(
        self,
        email: str,
        name: Optional[str] = None,
        language: Optional[str] = None,
        country: Optional[str] = None,
    ) -> User:
        """
        Update profile fields; None leaves a field unchanged.

        Raises:
            UserNotFoundError: If no user matches `email`
        """
        pass
