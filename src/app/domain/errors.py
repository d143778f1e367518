from __future__ import annotations


class CheffyError(Exception):
    pass


class RateLimiterUnavailableError(CheffyError):
    def __init__(self, reason: str):
        super().__init__(f"Rate limit counter store unavailable: {reason}")
        self.reason = reason


class UserNotFoundError(CheffyError):
    def __init__(self, email: str):
        super().__init__(f"No user found for email: {email}")
        self.email = email


class RecipeStoreError(CheffyError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"User store error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class SignupError(CheffyError):
    def __init__(self, message: str = "Unable to create account"):
        super().__init__(message)


class InvalidProfileError(CheffyError):
    def __init__(self, field: str, value: str):
        super().__init__(f"Unsupported {field}: {value}")
        self.field = field
        self.value = value


class CredentialUpdateError(CheffyError):
    def __init__(self, reason: str):
        super().__init__(f"Password could not be updated: {reason}")
        self.reason = reason
