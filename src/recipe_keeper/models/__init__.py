"""
Database models package.

This package contains all SQLAlchemy ORM models for the application.
"""

from .base import Base, BaseModel
from .tag import Tag, recipe_tags
from .recipe import Recipe, RecipeComponent

__all__ = [
    "Base",
    "BaseModel",
    "Tag",
    "recipe_tags",
    "Recipe",
    "RecipeComponent",
]
