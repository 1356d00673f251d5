"""
Recipe Book Statistics and Setup Endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.config import settings
from core.database import get_db
from schemas.recipe_schemas import MessageResponse, RecipeStats
from services.category_service import category_service
from services.recipe_service import recipe_service

logger = structlog.get_logger()

router = APIRouter()


@router.get("/stats", response_model=RecipeStats)
async def get_stats(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    owner_id: Optional[str] = Query(default=None, alias="ownerId"),
    db: AsyncSession = Depends(get_db)
):
    """Recipe totals, the user's favorites and recipes per category"""
    return await recipe_service.get_stats(user_id or settings.DEFAULT_USER_ID, db, owner_id=owner_id)


@router.post("/init", response_model=MessageResponse)
async def initialize_database(db: AsyncSession = Depends(get_db)):
    """Seed default categories and, on an empty book, the sample recipes"""
    try:
        await category_service.seed_default_categories(db)
        inserted = await recipe_service.seed_sample_recipes(db)
    except Exception as e:
        logger.error("Database initialization failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to initialize database"}
        )

    if inserted:
        return MessageResponse(message=f"Database initialized with {inserted} sample recipes")
    return MessageResponse(message="Database already initialized")
