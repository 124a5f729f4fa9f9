"""
Tag model and the recipe/tag association table.
"""

from sqlalchemy import Column, String, Integer, ForeignKey, Table, Index
from sqlalchemy.orm import relationship

from .base import Base, BaseModel


recipe_tags = Table(
    "recipe_tags",
    Base.metadata,
    Column("recipe_id", Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_recipe_tags_tag", "tag_id"),
)


class Tag(BaseModel):
    """
    Free-form label attached to recipes (e.g. "vegetarian", "sauce").

    Attributes:
        name: Unique tag name
    """

    __tablename__ = "tags"

    name = Column(String(100), nullable=False, unique=True, index=True)

    recipes = relationship(
        "Recipe",
        secondary=recipe_tags,
        back_populates="tags",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"Tag(id={self.id}, name='{self.name}')"
