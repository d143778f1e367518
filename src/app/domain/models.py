# src/app/domain/models.py
"""
Domain models for the recipe chat application.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional, Union


def _epoch_ms(value: Any) -> Optional[int]:
    # Stored documents may carry hand-edited or legacy timestamps
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Recipe:
    """A recipe saved from a chat answer. Never edited once stored."""
    title: str
    description: str
    ingredients: list[str] = field(default_factory=list)
    instructions: str = ""
    timestamp: Optional[int] = None  # epoch milliseconds

    def to_document(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Recipe":
        ingredients = doc.get("ingredients") or []
        if isinstance(ingredients, str):
            ingredients = [ingredients]
        return cls(
            title=str(doc.get("title") or ""),
            description=str(doc.get("description") or ""),
            ingredients=[str(item) for item in ingredients],
            instructions=str(doc.get("instructions") or ""),
            timestamp=_epoch_ms(doc.get("timestamp")),
        )


@dataclass
class User:
    """A user document: profile fields plus the embedded recipe list."""
    email: str
    id: Optional[str] = None
    name: Optional[str] = None
    language: str = "English"
    country: Optional[str] = None
    recipes: list[Recipe] = field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "language": self.language,
            "country": self.country,
            "recipes": [recipe.to_document() for recipe in self.recipes],
        }


@dataclass
class RateLimitResult:
    """Outcome of one fixed-window check. Every check consumes a unit."""
    allowed: bool
    limit: int
    remaining: int
    reset_at: int  # epoch milliseconds when the current window ends

    def to_state(self) -> dict[str, Any]:
        return {
            "success": self.allowed,
            "limit": self.limit,
            "remaining": self.remaining,
            "reset": self.reset_at,
        }

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_at),
        }


@dataclass(frozen=True)
class Authenticated:
    """Caller resolved from a valid session."""
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None

    @property
    def identity(self) -> str:
        return self.email or self.user_id


@dataclass(frozen=True)
class Unauthenticated:
    reason: str = "missing session"


SessionResult = Union[Authenticated, Unauthenticated]


@dataclass
class ParsedAnswer:
    """
    What the chat view shows for one assistant turn.
    `recipe` is set only when the model honored the JSON recipe shape;
    otherwise `text` carries the raw content.
    """
    text: str
    recipe: Optional[Recipe] = None
    error: bool = False

    @property
    def is_recipe(self) -> bool:
        return self.recipe is not None
