"""
Recipe Book Search Filters
Predicate conjunction over recipes; no ranking, no index
"""

from typing import Iterable, List

from schemas.recipe_schemas import RecipeFilters, RecipeResponse
from utils.text_utils import total_minutes


def _difficulty_value(difficulty) -> str:
    return getattr(difficulty, "value", difficulty) or ""


def matches_search(recipe: RecipeResponse, search: str) -> bool:
    """Case-insensitive substring match on title, description, ingredients and tags"""
    term = search.lower()
    if term in (recipe.title or "").lower():
        return True
    if term in (recipe.description or "").lower():
        return True
    if any(term in ingredient.item.lower() for ingredient in recipe.ingredients):
        return True
    return any(term in tag.lower() for tag in recipe.tags)


def matches_filters(recipe: RecipeResponse, filters: RecipeFilters) -> bool:
    """True when every supplied filter matches"""
    if filters.user_id and recipe.user_id != filters.user_id:
        return False

    if filters.search and not matches_search(recipe, filters.search):
        return False

    if filters.category and recipe.category != filters.category:
        return False

    if filters.difficulty and _difficulty_value(recipe.difficulty) != filters.difficulty:
        return False

    if filters.min_rating is not None and recipe.rating < filters.min_rating:
        return False

    if filters.tags:
        wanted = {tag.lower() for tag in filters.tags}
        if not wanted.intersection(tag.lower() for tag in recipe.tags):
            return False

    if filters.max_time is not None:
        if total_minutes(recipe.prep_time, recipe.cook_time) > filters.max_time:
            return False

    return True


def filter_recipes(recipes: Iterable[RecipeResponse], filters: RecipeFilters) -> List[RecipeResponse]:
    """Order-preserving subset of recipes matching all filters"""
    return [recipe for recipe in recipes if matches_filters(recipe, filters)]
