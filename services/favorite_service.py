"""
Recipe Book Favorite Service
Per-user favorite toggling with a denormalized counter on the recipe
"""

from typing import List, Tuple

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import RecipeNotFoundError
from middleware.logging import log_business_event
from models.recipe_models import Favorite, Recipe

logger = structlog.get_logger()


class FavoriteService:

    async def _find(self, recipe_id: str, user_id: str, db: AsyncSession):
        result = await db.execute(
            select(Favorite).where(Favorite.recipe_id == recipe_id, Favorite.user_id == user_id)
        )
        return result.scalars().first()

    async def toggle_favorite(self, recipe_id: str, user_id: str, db: AsyncSession) -> Tuple[bool, int]:
        """
        Flip the favorite state of a recipe for a user

        Returns:
            (is_favorite, favorites) after the toggle

        Raises:
            RecipeNotFoundError: the recipe does not exist
        """
        recipe = await db.get(Recipe, recipe_id)
        if not recipe:
            raise RecipeNotFoundError()

        existing = await self._find(recipe_id, user_id, db)
        if existing:
            await db.delete(existing)
            recipe.favorites = max(0, (recipe.favorites or 0) - 1)
            is_favorite = False
        else:
            db.add(Favorite(recipe_id=recipe_id, user_id=user_id))
            recipe.favorites = (recipe.favorites or 0) + 1
            is_favorite = True

        await db.commit()

        log_business_event(
            "favorite_toggled",
            {"recipe_id": recipe_id, "user_id": user_id, "is_favorite": is_favorite},
        )
        return is_favorite, recipe.favorites

    async def is_favorite(self, recipe_id: str, user_id: str, db: AsyncSession) -> bool:
        return await self._find(recipe_id, user_id, db) is not None

    async def list_favorite_recipes(self, user_id: str, db: AsyncSession) -> List[Recipe]:
        """The user's favorite recipes, most recently favorited first"""
        result = await db.execute(
            select(Recipe)
            .join(Favorite, Favorite.recipe_id == Recipe.id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        return list(result.scalars().all())


# Global service instance
favorite_service = FavoriteService()
