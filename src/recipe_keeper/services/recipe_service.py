"""
Recipe Service - persistence for recipe records and their tags.

This service provides the recipe store the component system reads from:
- Create / fetch / bulk fetch / delete recipes
- Tag lookup-or-create
- Storing sanitized per-serving nutrition

Every function accepts an optional session. When one is passed the caller
owns the transaction; otherwise the function runs in its own session_scope().
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from recipe_keeper.models import Recipe, Tag
from recipe_keeper.services.database import session_scope
from recipe_keeper.services.exceptions import (
    RecipeNotFound,
    ValidationError,
    DatabaseError,
)
from recipe_keeper.services.logging_utils import get_service_logger, log_operation
from recipe_keeper.services.nutrition_service import sanitize_nutrition
from recipe_keeper.utils.constants import MAX_TAG_LENGTH
from recipe_keeper.utils.validators import validate_recipe_data

logger = get_service_logger(__name__)


# ============================================================================
# Tags
# ============================================================================


def get_or_create_tags(tag_names: Iterable[str], session) -> List[Tag]:
    """
    Resolve tag names to Tag rows, creating missing ones.

    Names are stripped; blanks and repeats are skipped.

    Args:
        tag_names: Tag names in the order given
        session: SQLAlchemy session (required; runs inside the caller's transaction)

    Returns:
        List of Tag instances, one per distinct name
    """
    tags = []
    seen = set()
    for raw_name in tag_names:
        name = (raw_name or "").strip()
        if not name or name in seen:
            continue
        if len(name) > MAX_TAG_LENGTH:
            raise ValidationError([f"Tag '{name[:20]}...' is longer than {MAX_TAG_LENGTH} characters"])
        seen.add(name)

        tag = session.query(Tag).filter(Tag.name == name).first()
        if tag is None:
            tag = Tag(name=name)
            session.add(tag)
            session.flush()
        tags.append(tag)

    return tags


# ============================================================================
# CRUD Operations
# ============================================================================


def create_recipe(recipe_data: Dict, tag_names: List[str] = None, session=None) -> Recipe:
    """
    Create a new recipe.

    Args:
        recipe_data: Dictionary with recipe fields:
            - title: str (required)
            - servings: int >= 1 (optional)
            - description, notes: str (optional)
            - ingredients, instructions: list of str (optional)
            - nutrition: dict (optional, sanitized before storing)
        tag_names: Optional list of tag names
        session: Optional SQLAlchemy session

    Returns:
        Created Recipe instance

    Raises:
        ValidationError: If data validation fails
        DatabaseError: If database operation fails
    """
    is_valid, errors = validate_recipe_data(recipe_data)
    if not is_valid:
        raise ValidationError(errors)

    def _impl(session):
        recipe = Recipe(
            title=recipe_data["title"].strip(),
            description=recipe_data.get("description"),
            servings=recipe_data.get("servings"),
            ingredients=list(recipe_data.get("ingredients") or []),
            instructions=list(recipe_data.get("instructions") or []),
            nutrition=sanitize_nutrition(recipe_data.get("nutrition")),
            notes=recipe_data.get("notes"),
        )
        if tag_names:
            recipe.tags = get_or_create_tags(tag_names, session)

        session.add(recipe)
        session.flush()
        session.refresh(recipe)

        log_operation(logger, "create_recipe", "success", recipe_id=recipe.id)
        return recipe

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except ValidationError:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create recipe", e)


def get_recipe_by_id(recipe_id: int, session=None) -> Optional[Recipe]:
    """
    Fetch a recipe by ID.

    Returns:
        Recipe instance, or None if it doesn't exist
    """
    def _impl(session):
        return session.query(Recipe).filter(Recipe.id == recipe_id).first()

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get recipe {recipe_id}", e)


def get_recipe(recipe_id: int, session=None) -> Recipe:
    """
    Retrieve a recipe by ID.

    Raises:
        RecipeNotFound: If recipe doesn't exist
    """
    recipe = get_recipe_by_id(recipe_id, session=session)
    if recipe is None:
        raise RecipeNotFound(recipe_id)
    return recipe


def get_recipes_by_ids(recipe_ids: Iterable[int], session=None) -> List[Recipe]:
    """
    Fetch several recipes in one query.

    Unknown IDs are skipped. Results follow the order of recipe_ids.

    Returns:
        List of Recipe instances
    """
    ids = list(dict.fromkeys(recipe_ids))

    def _impl(session):
        if not ids:
            return []
        found = session.query(Recipe).filter(Recipe.id.in_(ids)).all()
        by_id = {recipe.id: recipe for recipe in found}
        return [by_id[recipe_id] for recipe_id in ids if recipe_id in by_id]

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to get recipes", e)


def set_recipe_nutrition(recipe_id: int, nutrition: Optional[Dict], session=None) -> Recipe:
    """
    Replace a recipe's stored per-serving nutrition.

    Values are sanitized first; passing None (or nothing valid) clears it.

    Raises:
        RecipeNotFound: If recipe doesn't exist
        DatabaseError: If database operation fails
    """
    def _impl(session):
        recipe = session.query(Recipe).filter(Recipe.id == recipe_id).first()
        if recipe is None:
            raise RecipeNotFound(recipe_id)

        recipe.nutrition = sanitize_nutrition(nutrition)
        session.flush()
        return recipe

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update nutrition for recipe {recipe_id}", e)


def delete_recipe(recipe_id: int, session=None) -> bool:
    """
    Delete a recipe.

    Component edges where the recipe is parent or child are deleted with it.

    Returns:
        True if deleted

    Raises:
        RecipeNotFound: If recipe doesn't exist
        DatabaseError: If database operation fails
    """
    def _impl(session):
        recipe = session.query(Recipe).filter(Recipe.id == recipe_id).first()
        if recipe is None:
            raise RecipeNotFound(recipe_id)

        session.delete(recipe)
        session.flush()

        log_operation(logger, "delete_recipe", "success", recipe_id=recipe_id)
        return True

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete recipe {recipe_id}", e)
