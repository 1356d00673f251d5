"""
Recipe Book Category Endpoints
Per-user categories on top of the shared defaults
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import get_db
from middleware.logging import log_business_event
from schemas.category_schemas import (
    CategoryCreate,
    CategoryCreatedResponse,
    CategoryListResponse,
    CategoryRename,
    CategoryResponse,
)
from schemas.recipe_schemas import MessageResponse
from services.category_service import category_service

router = APIRouter()


def _require_user(user_id: str) -> str:
    if not user_id or not user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "userId is required"}
        )
    if user_id.strip() == settings.SYSTEM_USER_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "userId is reserved"}
        )
    return user_id.strip()


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    user_id: str = Query(default="", alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """Default categories plus the user's own, sorted by name"""
    categories = await category_service.list_categories(_require_user(user_id), db)
    return CategoryListResponse(categories=[CategoryResponse.model_validate(c) for c in categories])


@router.post("", response_model=CategoryCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db)
):
    category = await category_service.create_category(
        _require_user(payload.user_id), payload.name, db, slug=payload.slug
    )
    log_business_event("category_created", {"slug": category.slug})
    return CategoryCreatedResponse(
        message="Category created successfully",
        category=CategoryResponse.model_validate(category),
    )


@router.put("/{slug}", response_model=CategoryResponse)
async def rename_category(
    slug: str,
    payload: CategoryRename,
    user_id: str = Query(default="", alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """Rename a user category; its recipes follow the new slug"""
    category = await category_service.rename_category(_require_user(user_id), slug, payload.name, db)
    return CategoryResponse.model_validate(category)


@router.delete("", response_model=MessageResponse)
async def delete_category(
    user_id: str = Query(default="", alias="userId"),
    slug: str = Query(default=""),
    db: AsyncSession = Depends(get_db)
):
    user_id = _require_user(user_id)
    if not slug:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "slug is required"}
        )

    await category_service.delete_category(user_id, slug, db)
    log_business_event("category_deleted", {"slug": slug})
    return MessageResponse(message="Category deleted successfully")
