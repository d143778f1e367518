from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class SaveRecipeRequest(BaseModel):
    email: str = Field(..., min_length=3)
    title: str = ""
    description: str = ""
    ingredients: Union[list[str], str] = Field(default_factory=list)
    instructions: str = ""
    timestamp: Optional[int] = None


class SaveRecipeResponse(BaseModel):
    text: str
    data: dict[str, Any]


class GetRecipesRequest(BaseModel):
    email: str = Field(..., min_length=3)


class RecipeOut(BaseModel):
    title: str
    description: str
    ingredients: list[str] = Field(default_factory=list)
    instructions: str = ""
    timestamp: Optional[int] = None


class GetRecipesResponse(BaseModel):
    recipes: list[RecipeOut]
