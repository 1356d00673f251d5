"""
Recipe Book Recipe Service
Recipe CRUD, search and statistics on top of the relational store
"""

from typing import Any, Dict, Iterable, List, Optional

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import InvalidRecipeError
from models.recipe_models import (
    Difficulty,
    Favorite,
    Recipe,
    RecipeIngredient,
    RecipeInstruction,
    RecipeTag,
    Tag,
    utcnow,
)
from schemas.recipe_schemas import (
    IngredientItem,
    RecipeCreate,
    RecipeFilters,
    RecipeResponse,
    RecipeStats,
    RecipeUpdate,
)
from services.recipe_filters import filter_recipes
from middleware.logging import log_business_event
from utils.text_utils import unique_stripped

logger = structlog.get_logger()

# Fields a client may never overwrite through a partial update
PROTECTED_FIELDS = {"id", "created_at", "updated_at", "user_id", "favorites"}

SAMPLE_RECIPES: List[Dict[str, Any]] = [
    {
        "title": "Pasta com Ervas Frescas",
        "description": "Uma deliciosa pasta italiana com ervas frescas e azeite de oliva",
        "prep_time": "15",
        "cook_time": "20",
        "servings": "4",
        "difficulty": "facil",
        "category": "pratos-principais",
        "temperature": "",
        "ingredients": [
            {"item": "Massa penne", "quantity": "400g"},
            {"item": "Manjericão fresco", "quantity": "1 xícara"},
            {"item": "Azeite de oliva", "quantity": "3 colheres de sopa"},
            {"item": "Alho", "quantity": "3 dentes"},
        ],
        "instructions": [
            "Cozinhe a massa em água fervente com sal até ficar al dente",
            "Em uma frigideira, aqueça o azeite e refogue o alho picado",
            "Adicione as ervas frescas e tempere com sal e pimenta",
            "Misture a massa escorrida com o molho e sirva imediatamente",
        ],
        "tags": ["Italiano", "Vegetariano", "Rápido"],
    },
    {
        "title": "Bolo de Chocolate",
        "description": "Bolo de chocolate fofinho e irresistível",
        "prep_time": "20",
        "cook_time": "40",
        "servings": "8",
        "difficulty": "medio",
        "category": "sobremesas",
        "temperature": "180°C",
        "ingredients": [
            {"item": "Farinha de trigo", "quantity": "2 xícaras"},
            {"item": "Chocolate em pó", "quantity": "1/2 xícara"},
            {"item": "Açúcar", "quantity": "1 1/2 xícara"},
            {"item": "Ovos", "quantity": "3 unidades"},
        ],
        "instructions": [
            "Pré-aqueça o forno a 180°C",
            "Misture todos os ingredientes secos em uma tigela",
            "Adicione os ovos e misture bem",
            "Asse por 40 minutos ou até dourar",
        ],
        "tags": ["Chocolate", "Festa", "Sobremesa"],
    },
    {
        "title": "Salada Caesar",
        "description": "Clássica salada Caesar com croutons crocantes",
        "prep_time": "15",
        "cook_time": "0",
        "servings": "2",
        "difficulty": "facil",
        "category": "saladas",
        "temperature": "",
        "ingredients": [
            {"item": "Alface romana", "quantity": "1 pé"},
            {"item": "Queijo parmesão", "quantity": "50g"},
            {"item": "Croutons", "quantity": "1 xícara"},
            {"item": "Molho Caesar", "quantity": "3 colheres de sopa"},
        ],
        "instructions": [
            "Lave e corte a alface em pedaços médios",
            "Adicione o molho Caesar e misture bem",
            "Finalize com queijo parmesão ralado e croutons",
            "Sirva imediatamente",
        ],
        "tags": ["Saudável", "Rápido", "Vegetariano"],
    },
]


def _build_ingredients(items: List[IngredientItem]) -> List[RecipeIngredient]:
    """Drop blank rows, keep form order"""
    rows = []
    for ingredient in items:
        item = ingredient.item.strip()
        if not item:
            continue
        rows.append(RecipeIngredient(position=len(rows), item=item, quantity=ingredient.quantity.strip()))
    return rows


def _build_instructions(steps: List[str]) -> List[RecipeInstruction]:
    cleaned = [step.strip() for step in steps if step and step.strip()]
    return [
        RecipeInstruction(step_number=number, instruction=step)
        for number, step in enumerate(cleaned, start=1)
    ]


class RecipeService:
    """Recipe CRUD operations; each call is all-or-nothing against the store"""

    async def _resolve_tags(
        self,
        names: List[str],
        db: AsyncSession,
        current_links: Iterable[RecipeTag] = (),
    ) -> List[RecipeTag]:
        """
        Link tags by name, creating the missing ones; existing links are reused

        Tags are shared case-insensitively, each link keeps the recipe's own spelling.
        """
        cleaned = unique_stripped(names)
        if not cleaned:
            return []

        result = await db.execute(
            select(Tag).where(func.lower(Tag.name).in_([name.lower() for name in cleaned]))
        )
        existing = {tag.name.lower(): tag for tag in result.scalars().all()}
        linked = {link.tag_id: link for link in current_links}

        links = []
        for position, name in enumerate(cleaned):
            tag = existing.get(name.lower())
            if tag is None:
                tag = Tag(name=name)
                db.add(tag)
                existing[name.lower()] = tag
            link = linked.get(tag.id) if tag.id is not None else None
            if link is None:
                link = RecipeTag(tag=tag)
            link.position = position
            link.name = name
            links.append(link)
        return links

    async def create_recipe(self, data: RecipeCreate, db: AsyncSession) -> Recipe:
        """Create a recipe with zero rating and zero favorites"""
        title = data.title.strip()
        if not title:
            raise InvalidRecipeError("Recipe title is required")

        now = utcnow()
        recipe = Recipe(
            user_id=data.user_id,
            title=title,
            description=data.description.strip(),
            prep_time=data.prep_time.strip(),
            cook_time=data.cook_time.strip(),
            servings=data.servings.strip(),
            difficulty=data.difficulty,
            category=data.category.strip(),
            temperature=data.temperature,
            image_url=data.image_url,
            rating=0.0,
            favorites=0,
            created_at=now,
            updated_at=now,
        )
        recipe.ingredients = _build_ingredients(data.ingredients)
        recipe.instruction_steps = _build_instructions(data.instructions)
        recipe.tag_links = await self._resolve_tags(data.tags, db)

        db.add(recipe)
        await db.commit()

        logger.info("Recipe created", recipe_id=recipe.id, title=recipe.title)
        log_business_event("recipe_created", {"recipe_id": recipe.id, "category": recipe.category})
        return recipe

    async def get_recipe(self, recipe_id: str, db: AsyncSession) -> Optional[Recipe]:
        result = await db.execute(select(Recipe).where(Recipe.id == recipe_id))
        return result.scalars().first()

    async def search_recipes(self, filters: RecipeFilters, db: AsyncSession) -> List[RecipeResponse]:
        """
        Recipes matching every supplied filter, newest first

        Equality and range predicates run in SQL; text, tag and time
        predicates run over the loaded rows.
        """
        query = select(Recipe)
        if filters.difficulty:
            try:
                difficulty = Difficulty(filters.difficulty)
            except ValueError:
                return []
            query = query.where(Recipe.difficulty == difficulty)
        if filters.user_id:
            query = query.where(Recipe.user_id == filters.user_id)
        if filters.category:
            query = query.where(Recipe.category == filters.category)
        if filters.min_rating is not None:
            query = query.where(Recipe.rating >= filters.min_rating)
        query = query.order_by(Recipe.created_at.desc(), Recipe.id)

        result = await db.execute(query)
        recipes = [RecipeResponse.model_validate(recipe) for recipe in result.scalars().all()]
        return filter_recipes(recipes, filters)

    async def update_recipe(self, recipe_id: str, updates: RecipeUpdate, db: AsyncSession) -> Optional[Recipe]:
        """Apply a partial update; last write wins"""
        recipe = await self.get_recipe(recipe_id, db)
        if not recipe:
            return None

        changes = updates.model_dump(exclude_unset=True)
        for field in PROTECTED_FIELDS:
            changes.pop(field, None)

        if "title" in changes:
            title = (changes.pop("title") or "").strip()
            if not title:
                raise InvalidRecipeError("Recipe title is required")
            recipe.title = title

        if "ingredients" in changes:
            changes.pop("ingredients")
            recipe.ingredients = _build_ingredients(updates.ingredients or [])
        if "instructions" in changes:
            changes.pop("instructions")
            recipe.instruction_steps = _build_instructions(updates.instructions or [])
        if "tags" in changes:
            changes.pop("tags")
            recipe.tag_links = await self._resolve_tags(updates.tags or [], db, recipe.tag_links)

        for field, value in changes.items():
            if value is None and field not in ("temperature", "image_url"):
                continue
            setattr(recipe, field, value)

        recipe.updated_at = utcnow()
        await db.commit()

        logger.info("Recipe updated", recipe_id=recipe_id, fields=sorted(updates.model_fields_set))
        return recipe

    async def delete_recipe(self, recipe_id: str, db: AsyncSession) -> bool:
        """Delete a recipe together with its favorites"""
        recipe = await self.get_recipe(recipe_id, db)
        if not recipe:
            return False

        await db.execute(delete(Favorite).where(Favorite.recipe_id == recipe_id))
        await db.delete(recipe)
        await db.commit()

        logger.info("Recipe deleted", recipe_id=recipe_id)
        log_business_event("recipe_deleted", {"recipe_id": recipe_id})
        return True

    async def get_stats(self, user_id: str, db: AsyncSession, owner_id: Optional[str] = None) -> RecipeStats:
        """Recipe totals, the user's favorite count and recipes per category"""
        scope = []
        if owner_id:
            scope.append(Recipe.user_id == owner_id)

        total_recipes = await db.scalar(select(func.count(Recipe.id)).where(*scope))
        total_favorites = await db.scalar(
            select(func.count(Favorite.id)).where(Favorite.user_id == user_id)
        )
        rows = await db.execute(
            select(Recipe.category, func.count(Recipe.id)).where(*scope).group_by(Recipe.category)
        )

        return RecipeStats(
            total_recipes=total_recipes or 0,
            total_favorites=total_favorites or 0,
            category_counts={category: count for category, count in rows.all()},
        )

    async def seed_sample_recipes(self, db: AsyncSession) -> int:
        """Populate an empty book with sample recipes"""
        count = await db.scalar(select(func.count(Recipe.id)))
        if count:
            return 0

        for sample in SAMPLE_RECIPES:
            await self.create_recipe(RecipeCreate(**sample), db)

        logger.info("Sample recipes inserted", count=len(SAMPLE_RECIPES))
        return len(SAMPLE_RECIPES)


# Global service instance
recipe_service = RecipeService()
