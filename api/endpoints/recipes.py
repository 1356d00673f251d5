"""
Recipe Book Recipe Endpoints
Recipe CRUD, search, card view-models and photo extraction
"""

import json
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.config import settings
from core.database import get_db
from core.exceptions import ExtractionError, RecipeBookError, RecipeNotFoundError
from schemas.recipe_schemas import (
    ExtractionResponse,
    MessageResponse,
    RecipeCard,
    RecipeCreate,
    RecipeDraft,
    RecipeFilters,
    RecipeResponse,
    RecipeUpdate,
)
from services.category_service import category_service
from services.favorite_service import favorite_service
from services.recipe_extraction_service import (
    RecipeExtractionService,
    merge_into_draft,
    recipe_extraction_service,
)
from services.recipe_service import recipe_service
from utils.presentation import build_recipe_card

logger = structlog.get_logger()

router = APIRouter()


def get_extraction_service() -> RecipeExtractionService:
    return recipe_extraction_service


def _split_tags(tags: Optional[str]) -> Optional[List[str]]:
    if not tags:
        return None
    values = [tag.strip() for tag in tags.split(",") if tag.strip()]
    return values or None


@router.get("", response_model=List[RecipeResponse])
async def list_recipes(
    search: Optional[str] = None,
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    min_rating: Optional[float] = Query(default=None, alias="minRating"),
    tags: Optional[str] = Query(default=None, description="Comma separated tag names"),
    max_time: Optional[int] = Query(default=None, alias="maxTime", ge=0),
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """List recipes matching every supplied filter, newest first"""
    filters = RecipeFilters(
        search=search or None,
        category=category or None,
        difficulty=difficulty or None,
        min_rating=min_rating,
        tags=_split_tags(tags),
        max_time=max_time,
        user_id=user_id or None,
    )
    return await recipe_service.search_recipes(filters, db)


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    recipe_data: RecipeCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new recipe"""
    recipe = await recipe_service.create_recipe(recipe_data, db)
    return RecipeResponse.model_validate(recipe)


@router.post("/extract", response_model=ExtractionResponse)
async def extract_recipe_from_photo(
    image: UploadFile = File(...),
    draft: Optional[str] = Form(default=None),
    user_id: Optional[str] = Form(default=None, alias="userId"),
    extraction: RecipeExtractionService = Depends(get_extraction_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Recognize a photographed recipe and merge it into the form draft

    The draft is returned unchanged for every field the photo did not show.
    """
    content_type = image.content_type or ""
    if content_type not in settings.ALLOWED_FILE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Only JPEG, PNG, WEBP or HEIC images are supported"}
        )

    image_bytes = await image.read()
    if not image_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Image file is empty"}
        )
    if len(image_bytes) > settings.MAX_FILE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={"error": f"Image file too large (max {settings.MAX_FILE_SIZE // (1024 * 1024)}MB)"}
        )

    try:
        current = RecipeDraft(**json.loads(draft)) if draft else RecipeDraft()
    except (json.JSONDecodeError, TypeError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Draft must be a JSON recipe object"}
        )

    extracted = await extraction.extract_recipe(image_bytes, content_type)

    if extracted.category:
        slug = await category_service.ensure_category(
            user_id or settings.DEFAULT_USER_ID, extracted.category, db
        )
        extracted = extracted.model_copy(update={"category": slug})

    try:
        merged = merge_into_draft(current, extracted)
    except ValidationError as e:
        logger.error("Extracted fields do not fit the draft", errors=e.error_count())
        raise ExtractionError()

    return ExtractionResponse(recipe=merged, extracted=extracted)


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: str,
    db: AsyncSession = Depends(get_db)
):
    recipe = await recipe_service.get_recipe(recipe_id, db)
    if not recipe:
        raise RecipeNotFoundError()
    return RecipeResponse.model_validate(recipe)


@router.get("/{recipe_id}/card", response_model=RecipeCard)
async def get_recipe_card(
    recipe_id: str,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """Card view-model for listings"""
    recipe = await recipe_service.get_recipe(recipe_id, db)
    if not recipe:
        raise RecipeNotFoundError()

    is_favorite = await favorite_service.is_favorite(recipe_id, user_id or settings.DEFAULT_USER_ID, db)
    return build_recipe_card(RecipeResponse.model_validate(recipe), is_favorite)


@router.put("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: str,
    updates: RecipeUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Partially update a recipe"""
    try:
        recipe = await recipe_service.update_recipe(recipe_id, updates, db)
    except RecipeBookError:
        raise
    except Exception as e:
        logger.error("Recipe update failed", recipe_id=recipe_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Internal server error"}
        )

    if not recipe:
        raise RecipeNotFoundError()
    return RecipeResponse.model_validate(recipe)


@router.delete("/{recipe_id}", response_model=MessageResponse)
async def delete_recipe(
    recipe_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Delete a recipe and its favorites"""
    if not await recipe_service.delete_recipe(recipe_id, db):
        raise RecipeNotFoundError()
    return MessageResponse(message="Recipe deleted successfully")
