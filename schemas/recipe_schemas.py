"""
Recipe Book Recipe Schemas
Pydantic models for recipe requests, responses and search filters
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.recipe_models import Difficulty


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted on input"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _coerce_text(v):
    if v is None:
        return ""
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class IngredientItem(CamelModel):
    """Ingredient line as entered in the recipe form"""
    item: str = Field(..., max_length=255)
    quantity: str = Field(default="", max_length=100)

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v):
        return _coerce_text(v)


class RecipeFields(CamelModel):
    """Fields shared by drafts, create payloads and responses"""
    description: str = ""
    prep_time: str = Field(default="", max_length=50, json_schema_extra={"example": "15"})
    cook_time: str = Field(default="", max_length=50, json_schema_extra={"example": "20"})
    servings: str = Field(default="", max_length=10, json_schema_extra={"example": "4"})
    difficulty: Difficulty = Difficulty.FACIL
    category: str = Field(default="", max_length=100, json_schema_extra={"example": "pratos-principais"})
    temperature: Optional[str] = Field(default=None, max_length=50)
    ingredients: List[IngredientItem] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None

    @field_validator("prep_time", "cook_time", "servings", "description", "category", mode="before")
    @classmethod
    def coerce_text_fields(cls, v):
        return _coerce_text(v)


class RecipeDraft(RecipeFields):
    """Recipe form state, possibly incomplete"""
    title: str = ""


class RecipeCreate(RecipeFields):
    """Schema for recipe creation"""
    title: str = Field(..., max_length=255, json_schema_extra={"example": "Bolo de Chocolate"})
    user_id: Optional[str] = Field(default=None, max_length=128)


class RecipeUpdate(CamelModel):
    """Partial update; only supplied fields are changed"""
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    prep_time: Optional[str] = Field(default=None, max_length=50)
    cook_time: Optional[str] = Field(default=None, max_length=50)
    servings: Optional[str] = Field(default=None, max_length=10)
    difficulty: Optional[Difficulty] = None
    category: Optional[str] = Field(default=None, max_length=100)
    temperature: Optional[str] = Field(default=None, max_length=50)
    ingredients: Optional[List[IngredientItem]] = None
    instructions: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    image_url: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)

    @field_validator("prep_time", "cook_time", "servings", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        if v is None:
            return v
        return _coerce_text(v)


class RecipeResponse(RecipeFields):
    """Recipe as returned by the API"""
    id: str
    title: str
    user_id: Optional[str] = None
    rating: float = 0.0
    favorites: int = 0
    created_at: datetime
    updated_at: datetime


class RecipeFilters(CamelModel):
    """Optional search predicates, combined with AND"""
    search: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    min_rating: Optional[float] = None
    tags: Optional[List[str]] = None
    max_time: Optional[int] = None
    user_id: Optional[str] = None


class FavoriteToggleRequest(CamelModel):
    recipe_id: str
    user_id: Optional[str] = None


class FavoriteToggleResponse(CamelModel):
    is_favorite: bool
    favorites: int


class FavoriteStatusResponse(CamelModel):
    is_favorite: bool


class RecipeStats(CamelModel):
    total_recipes: int
    total_favorites: int
    category_counts: Dict[str, int] = Field(default_factory=dict)


class RecipeCard(CamelModel):
    """View-model for a recipe card in listings"""
    id: str
    title: str
    description: str
    image_url: str
    total_time: str
    servings_label: str
    rating: float
    category: str
    visible_tags: List[str]
    hidden_tag_count: int
    overflow_badge: Optional[str] = None
    is_favorite: bool = False
    favorite_icon_class: str


class ExtractedRecipe(CamelModel):
    """Fields recognized in a recipe photo; anything unrecognized stays None"""
    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[List[IngredientItem]] = None
    instructions: Optional[List[str]] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    servings: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None


class ExtractionResponse(CamelModel):
    recipe: RecipeDraft
    extracted: ExtractedRecipe


class MessageResponse(BaseModel):
    message: str
