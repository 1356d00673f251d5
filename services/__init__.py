"""
Recipe Book Services Module
Core business logic for recipes, categories, favorites and photo extraction
"""

from .recipe_service import RecipeService, recipe_service
from .category_service import CategoryService, DEFAULT_CATEGORIES, category_service
from .favorite_service import FavoriteService, favorite_service
from .recipe_extraction_service import RecipeExtractionService, recipe_extraction_service

__all__ = [
    # Recipes
    "RecipeService",
    "recipe_service",

    # Categories
    "CategoryService",
    "DEFAULT_CATEGORIES",
    "category_service",

    # Favorites
    "FavoriteService",
    "favorite_service",

    # Photo extraction
    "RecipeExtractionService",
    "recipe_extraction_service"
]
