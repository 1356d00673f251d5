"""
Recipe Book Favorite Endpoints
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import get_db
from schemas.recipe_schemas import (
    FavoriteStatusResponse,
    FavoriteToggleRequest,
    FavoriteToggleResponse,
    RecipeResponse,
)
from services.favorite_service import favorite_service

router = APIRouter()


@router.get("", response_model=List[RecipeResponse])
async def list_favorites(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """The user's favorite recipes, most recent first"""
    recipes = await favorite_service.list_favorite_recipes(user_id or settings.DEFAULT_USER_ID, db)
    return [RecipeResponse.model_validate(recipe) for recipe in recipes]


@router.post("", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    payload: FavoriteToggleRequest,
    db: AsyncSession = Depends(get_db)
):
    is_favorite, favorites = await favorite_service.toggle_favorite(
        payload.recipe_id, payload.user_id or settings.DEFAULT_USER_ID, db
    )
    return FavoriteToggleResponse(is_favorite=is_favorite, favorites=favorites)


@router.get("/{recipe_id}", response_model=FavoriteStatusResponse)
async def favorite_status(
    recipe_id: str,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    is_favorite = await favorite_service.is_favorite(recipe_id, user_id or settings.DEFAULT_USER_ID, db)
    return FavoriteStatusResponse(is_favorite=is_favorite)
