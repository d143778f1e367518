# src/app/routers/recipes.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.app.deps import get_recipe_service
from src.app.domain.errors import RecipeStoreError, UserNotFoundError
from src.app.schemas.recipes import (
    GetRecipesRequest,
    GetRecipesResponse,
    RecipeOut,
    SaveRecipeRequest,
    SaveRecipeResponse,
)
from src.app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recipes"])


@router.post(
    "/saveRecipe",
    status_code=status.HTTP_201_CREATED,
    response_model=SaveRecipeResponse,
    responses={409: {"description": "No matching user or store failure"}},
)
async def save_recipe(
    payload: SaveRecipeRequest,
    service: RecipeService = Depends(get_recipe_service),
):
    try:
        user = service.save_recipe(
            email=payload.email,
            title=payload.title,
            description=payload.description,
            ingredients=payload.ingredients,
            instructions=payload.instructions,
            timestamp=payload.timestamp,
        )
    except (UserNotFoundError, RecipeStoreError) as exc:
        logger.warning("Recipe not saved: %s", exc)
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": str(exc)})

    return SaveRecipeResponse(text="Saved Recipe!", data=user.to_document())


@router.post("/getRecipes", response_model=GetRecipesResponse)
async def get_recipes(
    payload: GetRecipesRequest,
    service: RecipeService = Depends(get_recipe_service),
):
    try:
        recipes = service.list_recipes(payload.email)
    except UserNotFoundError as exc:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})
    except RecipeStoreError as exc:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": str(exc)})

    return GetRecipesResponse(recipes=[RecipeOut(**recipe.to_document()) for recipe in recipes])
