"""
Recipe Book Category Schemas
Pydantic models for the per-user category registry
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from schemas.recipe_schemas import CamelModel


class CategoryCreate(CamelModel):
    """Schema for category creation; slug is derived from name when omitted"""
    user_id: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(default=None, max_length=100)


class CategoryRename(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(CamelModel):
    id: int
    user_id: str
    name: str
    slug: str
    is_default: bool
    created_at: datetime


class CategoryListResponse(CamelModel):
    categories: List[CategoryResponse]


class CategoryCreatedResponse(CamelModel):
    message: str
    category: CategoryResponse
