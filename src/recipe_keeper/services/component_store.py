"""
Component Store - persistence for recipe component edges.

Thin query helpers over the recipe_components table. They always run inside
a session owned by the caller (recipe_component_service), never commit, and
do no validation: cycle, duplicate and existence checks belong to the
service layer.
"""

from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from recipe_keeper.models import Recipe, RecipeComponent


def list_children_of(parent_recipe_id: int, session: Session) -> List[RecipeComponent]:
    """Edges whose parent is parent_recipe_id, in sort_order (ties by id)."""
    return (
        session.query(RecipeComponent)
        .filter(RecipeComponent.parent_recipe_id == parent_recipe_id)
        .order_by(RecipeComponent.sort_order, RecipeComponent.id)
        .all()
    )


def list_child_ids_of(parent_recipe_id: int, session: Session) -> List[int]:
    """Child recipe IDs of a parent, without loading the recipes."""
    rows = (
        session.query(RecipeComponent.child_recipe_id)
        .filter(RecipeComponent.parent_recipe_id == parent_recipe_id)
        .all()
    )
    return [row[0] for row in rows]


def list_parents_of(child_recipe_id: int, session: Session) -> List[Recipe]:
    """Recipes that use child_recipe_id as a component, ordered by title."""
    return (
        session.query(Recipe)
        .join(RecipeComponent, Recipe.id == RecipeComponent.parent_recipe_id)
        .filter(RecipeComponent.child_recipe_id == child_recipe_id)
        .order_by(Recipe.title, Recipe.id)
        .all()
    )


def get(component_id: int, session: Session) -> Optional[RecipeComponent]:
    return session.query(RecipeComponent).filter(RecipeComponent.id == component_id).first()


def find_exact(
    parent_recipe_id: int, child_recipe_id: int, session: Session
) -> Optional[RecipeComponent]:
    """The edge for an exact (parent, child) pair, if any."""
    return (
        session.query(RecipeComponent)
        .filter(
            RecipeComponent.parent_recipe_id == parent_recipe_id,
            RecipeComponent.child_recipe_id == child_recipe_id,
        )
        .first()
    )


def max_sort_order(parent_recipe_id: int, session: Session) -> Optional[int]:
    """Highest sort_order among a parent's edges, or None if it has none."""
    return (
        session.query(func.max(RecipeComponent.sort_order))
        .filter(RecipeComponent.parent_recipe_id == parent_recipe_id)
        .scalar()
    )


def insert(
    parent_recipe_id: int,
    child_recipe_id: int,
    servings_needed: float,
    sort_order: int,
    session: Session,
) -> RecipeComponent:
    """Add an edge and flush so its ID is assigned."""
    component = RecipeComponent(
        parent_recipe_id=parent_recipe_id,
        child_recipe_id=child_recipe_id,
        servings_needed=float(servings_needed),
        sort_order=sort_order,
    )
    session.add(component)
    session.flush()
    return component


def update(component: RecipeComponent, fields: Dict, session: Session) -> RecipeComponent:
    """Apply the given servings_needed / sort_order values to an edge."""
    if "servings_needed" in fields:
        component.servings_needed = float(fields["servings_needed"])
    if "sort_order" in fields:
        component.sort_order = fields["sort_order"]
    session.flush()
    return component


def delete(component: RecipeComponent, session: Session) -> None:
    session.delete(component)
    session.flush()


def delete_all_for_parent(parent_recipe_id: int, session: Session) -> int:
    """
    Remove every edge of a parent.

    Returns:
        Number of edges deleted
    """
    deleted = (
        session.query(RecipeComponent)
        .filter(RecipeComponent.parent_recipe_id == parent_recipe_id)
        .delete(synchronize_session="fetch")
    )
    session.flush()
    return deleted
