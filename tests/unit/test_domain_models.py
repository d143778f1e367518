from __future__ import annotations

from src.app.domain.models import (
    Authenticated,
    ParsedAnswer,
    RateLimitResult,
    Recipe,
    Unauthenticated,
    User,
)


class TestRecipe:
    def test_defaults(self) -> None:
        recipe = Recipe(title="Soup", description="Warm")

        assert recipe.ingredients == []
        assert recipe.instructions == ""
        assert recipe.timestamp is None

    def test_from_document_tolerates_loose_shapes(self) -> None:
        recipe = Recipe.from_document({"title": "Soup", "ingredients": "water", "timestamp": "12"})

        assert recipe.description == ""
        assert recipe.ingredients == ["water"]
        assert recipe.timestamp == 12

    def test_from_document_drops_unreadable_timestamp(self) -> None:
        assert Recipe.from_document({"title": "Soup", "timestamp": "yesterday"}).timestamp is None
        assert Recipe.from_document({"title": "Soup", "timestamp": {"ms": 5}}).timestamp is None
        assert Recipe.from_document({"title": "Soup", "timestamp": 1.7e12}).timestamp == 1_700_000_000_000

    def test_document_round_trip_keeps_fields(self) -> None:
        recipe = Recipe(title="Soup", description="Warm", ingredients=["water"], instructions="Boil", timestamp=5)

        assert Recipe.from_document(recipe.to_document()) == recipe


class TestUser:
    def test_document_embeds_recipes(self) -> None:
        user = User(email="cook@example.com", recipes=[Recipe(title="Soup", description="Warm")])

        doc = user.to_document()

        assert doc["email"] == "cook@example.com"
        assert doc["language"] == "English"
        assert doc["recipes"][0]["title"] == "Soup"


class TestRateLimitResult:
    def test_state_and_headers(self) -> None:
        result = RateLimitResult(allowed=False, limit=5, remaining=0, reset_at=1_700_000_100_000)

        assert result.to_state() == {"success": False, "limit": 5, "remaining": 0, "reset": 1_700_000_100_000}
        assert result.headers() == {
            "X-RateLimit-Limit": "5",
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": "1700000100000",
        }


class TestSessionResult:
    def test_identity_prefers_email(self) -> None:
        assert Authenticated(user_id="u1", email="cook@example.com").identity == "cook@example.com"

    def test_identity_falls_back_to_user_id(self) -> None:
        assert Authenticated(user_id="u1").identity == "u1"

    def test_unauthenticated_reason(self) -> None:
        assert Unauthenticated().reason == "missing session"


class TestParsedAnswer:
    def test_is_recipe(self) -> None:
        assert ParsedAnswer(text="x", recipe=Recipe(title="Soup", description="")).is_recipe
        assert not ParsedAnswer(text="x").is_recipe
