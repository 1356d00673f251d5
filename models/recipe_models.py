"""
Recipe Book Recipe Models
Database models for recipes, ingredients, tags, favorites and categories
"""

from sqlalchemy import String, Text, Float, Integer, DateTime, ForeignKey, Boolean, Enum, UniqueConstraint
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import relationship, Mapped, mapped_column
from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import List, Optional
import uuid

from core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes, also on backends that drop the offset (SQLite)"""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Difficulty(str, PyEnum):
    """Recipe difficulty levels"""
    FACIL = "facil"
    MEDIO = "medio"
    DIFICIL = "dificil"


class Recipe(Base):
    """Recipe model for storing recipe information"""
    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Owner in the multi-tenant variant; NULL for the shared book
    user_id: Mapped[Optional[str]] = mapped_column(String(128), index=True, nullable=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    prep_time: Mapped[str] = mapped_column(String(50), default="", nullable=False)  # free-text minutes
    cook_time: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    servings: Mapped[str] = mapped_column(String(10), default="", nullable=False)
    difficulty: Mapped[Difficulty] = mapped_column(
        Enum(Difficulty, values_callable=lambda enum: [member.value for member in enum], native_enum=False, length=10),
        default=Difficulty.FACIL,
        nullable=False,
    )
    category: Mapped[str] = mapped_column(String(100), default="", nullable=False, index=True)
    temperature: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Ratings and popularity
    rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    favorites: Mapped[int] = mapped_column("favorites_count", Integer, default=0, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    # Relationships
    ingredients: Mapped[List["RecipeIngredient"]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.position",
        lazy="selectin",
    )
    instruction_steps: Mapped[List["RecipeInstruction"]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeInstruction.step_number",
        lazy="selectin",
    )
    tag_links: Mapped[List["RecipeTag"]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeTag.position",
        lazy="selectin",
    )
    favorite_entries: Mapped[List["Favorite"]] = relationship(
        back_populates="recipe",
        passive_deletes=True,
        lazy="noload",
    )

    def __repr__(self):
        return f"<Recipe(id={self.id}, title={self.title})>"

    @property
    def instructions(self) -> List[str]:
        return [step.instruction for step in self.instruction_steps]

    @property
    def tags(self) -> List[str]:
        return [link.name or link.tag.name for link in self.tag_links]


class RecipeIngredient(Base):
    """Ingredient line of a recipe, kept in form order"""
    __tablename__ = "recipe_ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[str] = mapped_column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    item: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    recipe: Mapped["Recipe"] = relationship(back_populates="ingredients")


class RecipeInstruction(Base):
    """Numbered preparation step"""
    __tablename__ = "recipe_instructions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[str] = mapped_column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    step_number: Mapped[int] = mapped_column(Integer, nullable=False)
    instruction: Mapped[str] = mapped_column(Text, nullable=False)

    recipe: Mapped["Recipe"] = relationship(back_populates="instruction_steps")


class Tag(Base):
    """Free-text tag, created implicitly on first use"""
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


class RecipeTag(Base):
    """Association between recipes and tags preserving tag order"""
    __tablename__ = "recipe_tags"

    recipe_id: Mapped[str] = mapped_column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    tag_id: Mapped[int] = mapped_column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # Spelling as entered for this recipe; the shared tag keeps its first spelling
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    recipe: Mapped["Recipe"] = relationship(back_populates="tag_links")
    tag: Mapped["Tag"] = relationship(lazy="joined")


class Favorite(Base):
    """A (recipe, user) favorite pair"""
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("recipe_id", "user_id", name="uq_favorites_recipe_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[str] = mapped_column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    recipe: Mapped["Recipe"] = relationship(back_populates="favorite_entries")


class UserCategory(Base):
    """Recipe category; system defaults are shared and cannot be deleted"""
    __tablename__ = "user_categories"
    __table_args__ = (
        UniqueConstraint("user_id", "slug", name="uq_user_categories_user_slug"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<UserCategory(user_id={self.user_id}, slug={self.slug}, default={self.is_default})>"
