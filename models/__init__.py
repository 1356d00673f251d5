"""
Recipe Book Database Models
Central import module for all database models
"""

from .recipe_models import (
    Recipe,
    RecipeIngredient,
    RecipeInstruction,
    Tag,
    RecipeTag,
    Favorite,
    UserCategory,
    Difficulty,
)

__all__ = [
    # Recipe models
    "Recipe",
    "RecipeIngredient",
    "RecipeInstruction",
    "Tag",
    "RecipeTag",

    # User-scoped models
    "Favorite",
    "UserCategory",

    # Enums
    "Difficulty",
]
