# src/app/presentation/answers.py
"""
Turns a chat proxy payload into what the chat view shows.

The model is asked to answer recipe requests with a JSON object, but nothing
enforces it: any content that does not decode to that shape is shown as text.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from src.app.domain.models import ParsedAnswer, Recipe

RECIPE_KEYS = ("recipeTitle", "recipeDescription", "ingredients", "instructions")


def _strip_fences(content: str) -> str:
    return content.replace("```json", "").replace("```", "").strip()


def _as_lines(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        return [line.strip(" -\t") for line in value.splitlines() if line.strip(" -\t")]
    return [str(value)]


def _as_text(value: Any) -> str:
    if isinstance(value, list):
        return "\n".join(str(item) for item in value)
    return str(value)


def recipe_from_content(content: str) -> Optional[Recipe]:
    """Decode model content into a Recipe, or None if it is not one."""
    try:
        data = json.loads(_strip_fences(content))
    except (TypeError, ValueError):
        return None

    if not isinstance(data, dict) or not all(key in data for key in RECIPE_KEYS):
        return None

    return Recipe(
        title=_as_text(data["recipeTitle"]),
        description=_as_text(data["recipeDescription"]),
        ingredients=_as_lines(data["ingredients"]),
        instructions=_as_text(data["instructions"]),
    )


def _message_content(payload: dict[str, Any]) -> Optional[str]:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def parse_answer(payload: Any) -> ParsedAnswer:
    """
    Read the `json` member of a chat proxy response.

    Never raises: unexpected shapes fall back to a text answer.
    """
    if isinstance(payload, str):
        return ParsedAnswer(text=payload)
    if not isinstance(payload, dict):
        return ParsedAnswer(text="" if payload is None else str(payload))

    content = _message_content(payload)
    if content is not None:
        recipe = recipe_from_content(content)
        return ParsedAnswer(text=content, recipe=recipe)

    text = payload.get("text")
    if isinstance(text, str):
        return ParsedAnswer(text=text)

    try:
        return ParsedAnswer(text=json.dumps(payload, ensure_ascii=False))
    except (TypeError, ValueError):
        return ParsedAnswer(text=str(payload))
