from __future__ import annotations

import pytest

from src.app.domain.errors import UserNotFoundError
from src.app.domain.models import Recipe, User
from src.app.services.recipe_service import RecipeService
from tests.unit.stubs import UserRepositoryStub


def _user_with_recipe() -> User:
    return User(
        email="cook@example.com",
        name="Cook",
        recipes=[Recipe(title="Soup", description="Warm", ingredients=["water"], instructions="Boil", timestamp=1)],
    )


class TestRecipeServiceSave:
    def test_appends_without_removing_prior_entries(self) -> None:
        repo = UserRepositoryStub([_user_with_recipe()])
        service = RecipeService(repo)

        service.save_recipe(
            email="cook@example.com",
            title="Salad",
            description="Fresh",
            ingredients=["lettuce", "tomato"],
            instructions="Toss",
        )
        recipes = service.list_recipes("cook@example.com")

        assert [r.title for r in recipes] == ["Soup", "Salad"]
        assert recipes[1].ingredients == ["lettuce", "tomato"]

    def test_duplicates_are_kept(self) -> None:
        repo = UserRepositoryStub([User(email="cook@example.com")])
        service = RecipeService(repo)

        for _ in range(2):
            service.save_recipe("cook@example.com", "Soup", "Warm", ["water"], "Boil")

        assert len(service.list_recipes("cook@example.com")) == 2

    def test_returns_updated_user(self) -> None:
        repo = UserRepositoryStub([User(email="cook@example.com")])
        service = RecipeService(repo)

        user = service.save_recipe("cook@example.com", "Soup", "Warm", ["water"], "Boil")

        assert user.email == "cook@example.com"
        assert user.recipes[-1].title == "Soup"
        assert user.recipes[-1].timestamp is not None

    def test_unknown_user_raises_and_creates_nothing(self) -> None:
        repo = UserRepositoryStub()
        service = RecipeService(repo)

        with pytest.raises(UserNotFoundError):
            service.save_recipe("ghost@example.com", "Soup", "Warm", ["water"], "Boil")

        assert repo.users == {}
        assert repo.created == []

    def test_ingredient_string_becomes_single_item(self) -> None:
        repo = UserRepositoryStub([User(email="cook@example.com")])
        service = RecipeService(repo)

        user = service.save_recipe("cook@example.com", "Soup", "Warm", "water", "Boil")

        assert user.recipes[-1].ingredients == ["water"]


class TestRecipeServiceList:
    def test_newest_first(self) -> None:
        repo = UserRepositoryStub([_user_with_recipe()])
        service = RecipeService(repo)
        service.save_recipe("cook@example.com", "Salad", "Fresh", [], "Toss")

        recipes = service.list_recipes("cook@example.com", newest_first=True)

        assert [r.title for r in recipes] == ["Salad", "Soup"]

    def test_unknown_user_raises(self) -> None:
        service = RecipeService(UserRepositoryStub())

        with pytest.raises(UserNotFoundError):
            service.list_recipes("ghost@example.com")
