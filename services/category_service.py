"""
Recipe Book Category Service
Per-user category registry with immutable system defaults
"""

from typing import List, Optional

import structlog
from sqlalchemy import select, update, or_
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.exceptions import (
    CategoryAlreadyExistsError,
    CategoryNotFoundError,
    DefaultCategoryError,
)
from models.recipe_models import Recipe, UserCategory
from utils.text_utils import slugify

settings = get_settings()
logger = structlog.get_logger()

DEFAULT_CATEGORIES = [
    {"name": "Pratos Principais", "slug": "pratos-principais"},
    {"name": "Sobremesas", "slug": "sobremesas"},
    {"name": "Entradas", "slug": "entradas"},
    {"name": "Bebidas", "slug": "bebidas"},
    {"name": "Lanches", "slug": "lanches"},
    {"name": "Saladas", "slug": "saladas"},
]


class CategoryService:
    def __init__(self):
        self.system_user_id = settings.SYSTEM_USER_ID

    async def seed_default_categories(self, db: AsyncSession) -> int:
        """Insert system categories once; returns how many were added"""
        result = await db.execute(
            select(UserCategory.slug).where(UserCategory.user_id == self.system_user_id)
        )
        existing = set(result.scalars().all())

        added = 0
        for category in DEFAULT_CATEGORIES:
            if category["slug"] in existing:
                continue
            db.add(UserCategory(
                user_id=self.system_user_id,
                name=category["name"],
                slug=category["slug"],
                is_default=True,
            ))
            added += 1

        if added:
            await db.commit()
            logger.info("Default categories seeded", count=added)
        return added

    async def list_categories(self, user_id: str, db: AsyncSession) -> List[UserCategory]:
        """Defaults plus the user's own categories, sorted by name"""
        result = await db.execute(
            select(UserCategory)
            .where(or_(
                UserCategory.is_default.is_(True),
                (UserCategory.user_id == user_id) & UserCategory.is_default.is_(False),
            ))
            .order_by(UserCategory.name)
        )
        return list(result.scalars().all())

    async def find_visible(self, user_id: str, slug: str, db: AsyncSession) -> Optional[UserCategory]:
        """Category with this slug owned by the user or provided by the system"""
        result = await db.execute(
            select(UserCategory)
            .where(
                UserCategory.slug == slug,
                or_(UserCategory.user_id == user_id, UserCategory.is_default.is_(True)),
            )
            .order_by(UserCategory.is_default.desc())
        )
        return result.scalars().first()

    async def create_category(
        self,
        user_id: str,
        name: str,
        db: AsyncSession,
        slug: Optional[str] = None,
    ) -> UserCategory:
        """
        Create a user category

        Raises:
            ValueError: name does not yield a usable slug
            CategoryAlreadyExistsError: slug already visible to the user
        """
        name = name.strip()
        slug = slugify(slug or name)
        if not name or not slug:
            raise ValueError("Category name must contain letters or digits")

        if await self.find_visible(user_id, slug, db):
            raise CategoryAlreadyExistsError()

        category = UserCategory(user_id=user_id, name=name, slug=slug, is_default=False)
        db.add(category)
        await db.commit()

        logger.info("Category created", user_id=user_id, slug=slug)
        return category

    async def _get_owned(self, user_id: str, slug: str, db: AsyncSession) -> UserCategory:
        category = await self.find_visible(user_id, slug, db)
        if not category:
            raise CategoryNotFoundError()
        if category.is_default:
            raise DefaultCategoryError()
        return category

    async def rename_category(
        self,
        user_id: str,
        slug: str,
        new_name: str,
        db: AsyncSession,
    ) -> UserCategory:
        """Rename a user category and re-point the user's recipes to the new slug"""
        category = await self._get_owned(user_id, slug, db)

        new_name = new_name.strip()
        new_slug = slugify(new_name)
        if not new_slug:
            raise ValueError("Category name must contain letters or digits")
        if new_slug != slug and await self.find_visible(user_id, new_slug, db):
            raise CategoryAlreadyExistsError()

        category.name = new_name
        category.slug = new_slug
        if new_slug != slug:
            await db.execute(
                update(Recipe)
                .where(Recipe.user_id == user_id, Recipe.category == slug)
                .values(category=new_slug)
            )
        await db.commit()

        logger.info("Category renamed", user_id=user_id, old_slug=slug, new_slug=new_slug)
        return category

    async def delete_category(self, user_id: str, slug: str, db: AsyncSession) -> bool:
        """
        Delete a user category

        Raises:
            CategoryNotFoundError: no such category for the user
            DefaultCategoryError: the category is a system default
        """
        category = await self._get_owned(user_id, slug, db)
        await db.delete(category)
        await db.commit()

        logger.info("Category deleted", user_id=user_id, slug=slug)
        return True

    async def ensure_category(self, user_id: str, name: str, db: AsyncSession) -> Optional[str]:
        """Slug for a category name, creating the category if nobody has it yet"""
        slug = slugify(name)
        if not slug:
            return None

        if await self.find_visible(user_id, slug, db):
            return slug

        await self.create_category(user_id, name, db, slug=slug)
        return slug


# Global service instance
category_service = CategoryService()
