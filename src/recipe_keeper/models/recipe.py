"""
Recipe models.

This module contains:
- Recipe: Main recipe model with servings, ingredient/instruction lists and
  per-serving nutrition
- RecipeComponent: Edge linking a parent recipe to a child (component) recipe
"""

from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Text,
    JSON,
    ForeignKey,
    Index,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import BaseModel
from .tag import recipe_tags


class Recipe(BaseModel):
    """
    Recipe model.

    Attributes:
        title: Recipe title (required)
        description: Short description
        servings: Number of servings the recipe as written produces (None = unknown)
        ingredients: Ingredient lines as free text
        instructions: Instruction steps as free text
        nutrition: Sparse per-serving nutrition dict (None = never estimated)
        notes: Personal cooking notes
    """

    __tablename__ = "recipes"

    title = Column(String(200), nullable=False, index=True)
    description = Column(String(1000), nullable=True)

    servings = Column(Integer, nullable=True)

    ingredients = Column(JSON, nullable=False, default=list)
    instructions = Column(JSON, nullable=False, default=list)

    # Per-serving nutrition; keys absent from the dict are unknown, not zero
    nutrition = Column(JSON, nullable=True)

    notes = Column(Text, nullable=True)

    tags = relationship(
        "Tag",
        secondary=recipe_tags,
        back_populates="recipes",
        order_by="Tag.name",
        lazy="selectin",
    )

    # Component edges where this recipe is the parent
    child_components = relationship(
        "RecipeComponent",
        foreign_keys="RecipeComponent.parent_recipe_id",
        back_populates="parent_recipe",
        cascade="all, delete-orphan",
        lazy="select",
    )
    # Component edges where this recipe is the child
    used_in_components = relationship(
        "RecipeComponent",
        foreign_keys="RecipeComponent.child_recipe_id",
        back_populates="child_recipe",
        cascade="all, delete-orphan",
        lazy="select",
    )

    __table_args__ = (
        CheckConstraint(
            "servings IS NULL OR servings >= 1", name="ck_recipe_servings_positive"
        ),
    )

    def __repr__(self) -> str:
        return f"Recipe(id={self.id}, title='{self.title}', servings={self.servings})"

    @property
    def tag_names(self) -> list:
        return [tag.name for tag in self.tags]

    def to_dict(self) -> dict:
        """
        Convert recipe to dictionary.

        Tag names are always included; component edges are never included
        here (use the component service to materialize the hierarchy).
        """
        result = super().to_dict()
        result["ingredients"] = list(self.ingredients or [])
        result["instructions"] = list(self.instructions or [])
        result["nutrition"] = dict(self.nutrition) if self.nutrition else None
        result["tags"] = self.tag_names
        return result


class RecipeComponent(BaseModel):
    """
    Edge linking a parent recipe to a child (component) recipe.

    A row means "the parent recipe requires servings_needed servings of the
    child recipe". The edge set must stay acyclic; self-reference and
    duplicate pairs are also rejected at the database level.

    Attributes:
        parent_recipe_id: Foreign key to the recipe that uses the component
        child_recipe_id: Foreign key to the recipe used as a component
        servings_needed: Servings of the child required by one batch of the parent
        sort_order: Display order among siblings of the same parent
    """

    __tablename__ = "recipe_components"

    parent_recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    child_recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )

    servings_needed = Column(Float, nullable=False, default=1.0)
    sort_order = Column(Integer, nullable=False, default=0)

    parent_recipe = relationship(
        "Recipe",
        foreign_keys=[parent_recipe_id],
        back_populates="child_components",
        lazy="joined",
    )
    child_recipe = relationship(
        "Recipe",
        foreign_keys=[child_recipe_id],
        back_populates="used_in_components",
        lazy="joined",
    )

    __table_args__ = (
        CheckConstraint("servings_needed > 0", name="ck_recipe_component_servings_positive"),
        CheckConstraint(
            "parent_recipe_id != child_recipe_id",
            name="ck_recipe_component_no_self_reference",
        ),
        UniqueConstraint(
            "parent_recipe_id",
            "child_recipe_id",
            name="uq_recipe_component_parent_child",
        ),
        Index("idx_recipe_component_parent", "parent_recipe_id"),
        Index("idx_recipe_component_child", "child_recipe_id"),
        Index("idx_recipe_component_sort", "parent_recipe_id", "sort_order"),
    )

    def __repr__(self) -> str:
        return (
            f"RecipeComponent(parent_recipe_id={self.parent_recipe_id}, "
            f"child_recipe_id={self.child_recipe_id}, "
            f"servings_needed={self.servings_needed})"
        )

    def to_dict(self, include_relationships: bool = False) -> dict:
        """
        Convert component edge to dictionary.

        Args:
            include_relationships: If True, include the child recipe as "recipe"

        Returns:
            Dictionary representation
        """
        result = super().to_dict()

        if include_relationships and self.child_recipe is not None:
            result["recipe"] = self.child_recipe.to_dict()

        return result
