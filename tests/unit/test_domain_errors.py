from __future__ import annotations

from src.app.domain.errors import (
    CheffyError,
    CredentialUpdateError,
    InvalidProfileError,
    RateLimiterUnavailableError,
    RecipeStoreError,
    SignupError,
    UserNotFoundError,
)


class TestCheffyError:
    def test_base_exception(self) -> None:
        error = CheffyError("Base error")
        assert str(error) == "Base error"
        assert isinstance(error, Exception)


class TestRateLimiterUnavailableError:
    def test_message_and_reason(self) -> None:
        error = RateLimiterUnavailableError("connection refused")
        assert "connection refused" in str(error)
        assert error.reason == "connection refused"
        assert isinstance(error, CheffyError)


class TestUserNotFoundError:
    def test_carries_email(self) -> None:
        error = UserNotFoundError("ghost@example.com")
        assert str(error) == "No user found for email: ghost@example.com"
        assert error.email == "ghost@example.com"


class TestRecipeStoreError:
    def test_operation_and_reason(self) -> None:
        error = RecipeStoreError("append_recipe", "timeout")
        assert str(error) == "User store error during append_recipe: timeout"
        assert error.operation == "append_recipe"
        assert error.reason == "timeout"


class TestSignupError:
    def test_default_message(self) -> None:
        assert str(SignupError()) == "Unable to create account"


class TestInvalidProfileError:
    def test_field_and_value(self) -> None:
        error = InvalidProfileError("language", "Klingon")
        assert str(error) == "Unsupported language: Klingon"
        assert error.field == "language"


class TestCredentialUpdateError:
    def test_carries_reason(self) -> None:
        error = CredentialUpdateError("auth unavailable")
        assert str(error) == "Password could not be updated: auth unavailable"
        assert error.reason == "auth unavailable"
        assert isinstance(error, CheffyError)
