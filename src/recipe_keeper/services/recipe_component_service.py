"""
Recipe Component Service - compound recipes built from other recipes.

A recipe may use other recipes as components ("Lasagna" uses 2 servings of
"Marinara Sauce"). Component edges form a directed graph over recipes that
must stay acyclic. This service provides:

- Cycle detection for a proposed parent -> child edge
- Add / update / remove / bulk-replace of a recipe's direct components
- Nested hierarchy reconstruction with cycle-safe traversal
- Per-serving nutrition aggregation over the direct components

Mutations run in a write-locked session_scope() so the cycle check and the
edge write commit together. Every function accepts an optional session; a
caller that passes one owns the transaction.
"""

import logging
from typing import Dict, List, Optional, Set

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from recipe_keeper.models import RecipeComponent
from recipe_keeper.services import component_store, recipe_service
from recipe_keeper.services.database import session_scope
from recipe_keeper.services.exceptions import (
    RecipeNotFound,
    ComponentNotFound,
    CircularReferenceError,
    DuplicateComponentError,
    ValidationError,
    DatabaseError,
)
from recipe_keeper.services.logging_utils import get_service_logger, log_operation
from recipe_keeper.services.nutrition_service import aggregate_nutrition
from recipe_keeper.utils.constants import DEFAULT_SERVINGS_NEEDED
from recipe_keeper.utils.validators import validate_positive_number, validate_sort_order

logger = get_service_logger(__name__)


def _component_with_recipe(component: RecipeComponent) -> Dict:
    """Edge fields plus the child recipe's current data under "recipe"."""
    return component.to_dict(include_relationships=True)


def _is_duplicate_pair_error(error: IntegrityError) -> bool:
    """True if the error comes from the unique (parent, child) constraint."""
    message = str(error.orig)
    # PostgreSQL names the constraint; SQLite names the columns
    return (
        "uq_recipe_component_parent_child" in message
        or "recipe_components.parent_recipe_id, recipe_components.child_recipe_id" in message
    )


def _validate_servings_needed(servings_needed) -> None:
    is_valid, error = validate_positive_number(servings_needed, "Servings needed")
    if not is_valid:
        raise ValidationError([error])


# ============================================================================
# Cycle Detection
# ============================================================================


def would_create_cycle(parent_recipe_id: int, child_recipe_id: int, session=None) -> bool:
    """
    Check if adding parent -> child would create a circular reference.

    Searches depth-first from the child along existing component edges; if
    the parent is reachable, the new edge would close a cycle. A recipe is
    expanded at most once, so the search terminates even when the stored
    graph already contains a cycle.

    Args:
        parent_recipe_id: Recipe that would use the component
        child_recipe_id: Recipe proposed as the component
        session: Optional SQLAlchemy session

    Returns:
        True if a cycle would be created, False if safe
    """
    def _impl(session):
        if parent_recipe_id == child_recipe_id:
            return True

        visited: Set[int] = set()
        stack = [child_recipe_id]
        while stack:
            current_id = stack.pop()
            if current_id == parent_recipe_id:
                return True
            if current_id in visited:
                continue
            visited.add(current_id)
            stack.extend(component_store.list_child_ids_of(current_id, session))

        return False

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to check for circular references", e)


# ============================================================================
# Component Mutations
# ============================================================================


def add_component(
    parent_recipe_id: int,
    child_recipe_id: int,
    servings_needed: float = DEFAULT_SERVINGS_NEEDED,
    session=None,
) -> Dict:
    """
    Add a recipe as a component of another recipe.

    The new edge is appended after the parent's existing components.

    Args:
        parent_recipe_id: Recipe that uses the component
        child_recipe_id: Recipe to add as a component
        servings_needed: Servings of the child needed (default: 1)
        session: Optional SQLAlchemy session

    Returns:
        Dict of the created edge with the child recipe under "recipe"

    Raises:
        ValidationError: If servings_needed is not a number > 0
        RecipeNotFound: If parent or child recipe doesn't exist
        CircularReferenceError: If the edge would create a cycle
        DuplicateComponentError: If the child is already a component of the parent
        DatabaseError: If database operation fails
    """
    _validate_servings_needed(servings_needed)

    def _impl(session):
        recipe_service.get_recipe(parent_recipe_id, session=session)
        recipe_service.get_recipe(child_recipe_id, session=session)

        if would_create_cycle(parent_recipe_id, child_recipe_id, session=session):
            log_operation(
                logger,
                operation="add_component",
                outcome="rejected_circular_reference",
                parent_recipe_id=parent_recipe_id,
                child_recipe_id=child_recipe_id,
            )
            raise CircularReferenceError(parent_recipe_id, child_recipe_id)

        if component_store.find_exact(parent_recipe_id, child_recipe_id, session) is not None:
            raise DuplicateComponentError(parent_recipe_id, child_recipe_id)

        max_order = component_store.max_sort_order(parent_recipe_id, session)
        sort_order = 0 if max_order is None else max_order + 1

        component = component_store.insert(
            parent_recipe_id, child_recipe_id, servings_needed, sort_order, session
        )

        log_operation(
            logger,
            operation="add_component",
            outcome="success",
            component_id=component.id,
            parent_recipe_id=parent_recipe_id,
            child_recipe_id=child_recipe_id,
            sort_order=sort_order,
        )
        return _component_with_recipe(component)

    try:
        if session is not None:
            return _impl(session)
        with session_scope(write=True) as session:
            return _impl(session)

    except (RecipeNotFound, CircularReferenceError, DuplicateComponentError):
        raise
    except IntegrityError as e:
        if _is_duplicate_pair_error(e):
            raise DuplicateComponentError(parent_recipe_id, child_recipe_id)
        raise DatabaseError("Failed to add recipe component", e)
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to add recipe component", e)


def update_component(
    component_id: int,
    servings_needed: Optional[float] = None,
    sort_order: Optional[int] = None,
    session=None,
) -> Dict:
    """
    Update servings needed and/or display order of a component edge.

    Fields left as None are not changed.

    Args:
        component_id: ID of the component edge
        servings_needed: New servings needed (> 0)
        sort_order: New display position (whole number >= 0)
        session: Optional SQLAlchemy session

    Returns:
        Dict of the updated edge with the child recipe under "recipe"

    Raises:
        ValidationError: If no field is given or a value is invalid
        ComponentNotFound: If the edge doesn't exist
        DatabaseError: If database operation fails
    """
    fields = {}
    errors = []
    if servings_needed is not None:
        is_valid, error = validate_positive_number(servings_needed, "Servings needed")
        if is_valid:
            fields["servings_needed"] = servings_needed
        else:
            errors.append(error)
    if sort_order is not None:
        is_valid, error = validate_sort_order(sort_order)
        if is_valid:
            fields["sort_order"] = sort_order
        else:
            errors.append(error)
    if errors:
        raise ValidationError(errors)
    if not fields:
        raise ValidationError(["Provide servings_needed or sort_order to update"])

    def _impl(session):
        component = component_store.get(component_id, session)
        if component is None:
            raise ComponentNotFound(component_id)

        component_store.update(component, fields, session)

        log_operation(
            logger,
            operation="update_component",
            outcome="success",
            component_id=component_id,
            **fields,
        )
        return _component_with_recipe(component)

    try:
        if session is not None:
            return _impl(session)
        with session_scope(write=True) as session:
            return _impl(session)

    except ComponentNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update recipe component {component_id}", e)


def remove_component(component_id: int, session=None) -> bool:
    """
    Remove a component edge.

    Removing an edge that no longer exists is an error, not a no-op.

    Returns:
        True once removed

    Raises:
        ComponentNotFound: If the edge doesn't exist
        DatabaseError: If database operation fails
    """
    def _impl(session):
        component = component_store.get(component_id, session)
        if component is None:
            raise ComponentNotFound(component_id)

        parent_recipe_id = component.parent_recipe_id
        child_recipe_id = component.child_recipe_id
        component_store.delete(component, session)

        log_operation(
            logger,
            operation="remove_component",
            outcome="success",
            component_id=component_id,
            parent_recipe_id=parent_recipe_id,
            child_recipe_id=child_recipe_id,
        )
        return True

    try:
        if session is not None:
            return _impl(session)
        with session_scope(write=True) as session:
            return _impl(session)

    except ComponentNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to remove recipe component {component_id}", e)


def _normalize_component_entries(components: List[Dict]) -> List[Dict]:
    """Validate set_components input and fill in default servings_needed."""
    if not isinstance(components, list):
        raise ValidationError(["Components must be a list"])

    entries = []
    errors = []
    for index, item in enumerate(components):
        if not isinstance(item, dict) or item.get("child_recipe_id") is None:
            errors.append(f"Component {index + 1}: child_recipe_id is required")
            continue

        child_recipe_id = item["child_recipe_id"]
        if isinstance(child_recipe_id, bool) or not isinstance(child_recipe_id, int):
            errors.append(f"Component {index + 1}: child_recipe_id must be a whole number")
            continue

        servings_needed = item.get("servings_needed", DEFAULT_SERVINGS_NEEDED)
        is_valid, error = validate_positive_number(
            servings_needed, f"Component {index + 1} servings needed"
        )
        if not is_valid:
            errors.append(error)
            continue

        entries.append(
            {"child_recipe_id": child_recipe_id, "servings_needed": servings_needed}
        )

    if errors:
        raise ValidationError(errors)
    return entries


def set_components(parent_recipe_id: int, components: List[Dict], session=None) -> List[Dict]:
    """
    Replace all components of a recipe.

    All checks run before anything is deleted; if any candidate fails, the
    recipe's existing components are left exactly as they were. Each
    candidate is checked for cycles against the stored graph, not against
    the other candidates in the same call.

    Args:
        parent_recipe_id: Recipe whose components are replaced
        components: List of dicts, in display order:
            - child_recipe_id: int (required)
            - servings_needed: float > 0 (default: 1)
        session: Optional SQLAlchemy session

    Returns:
        List of created edge dicts (sort_order = list position), each with
        the child recipe under "recipe"

    Raises:
        ValidationError: If the list or an entry is malformed
        RecipeNotFound: If the parent or any child recipe doesn't exist
        DuplicateComponentError: If a child appears twice in the list
        CircularReferenceError: If any candidate would create a cycle
        DatabaseError: If database operation fails
    """
    entries = _normalize_component_entries(components)

    seen = set()
    for entry in entries:
        if entry["child_recipe_id"] in seen:
            raise DuplicateComponentError(parent_recipe_id, entry["child_recipe_id"])
        seen.add(entry["child_recipe_id"])

    def _impl(session):
        recipe_service.get_recipe(parent_recipe_id, session=session)

        child_ids = [entry["child_recipe_id"] for entry in entries]
        found_ids = {
            recipe.id for recipe in recipe_service.get_recipes_by_ids(child_ids, session=session)
        }
        for child_id in child_ids:
            if child_id not in found_ids:
                raise RecipeNotFound(child_id)

        for child_id in child_ids:
            if would_create_cycle(parent_recipe_id, child_id, session=session):
                log_operation(
                    logger,
                    operation="set_components",
                    outcome="rejected_circular_reference",
                    parent_recipe_id=parent_recipe_id,
                    child_recipe_id=child_id,
                )
                raise CircularReferenceError(parent_recipe_id, child_id)

        removed = component_store.delete_all_for_parent(parent_recipe_id, session)

        created = []
        for index, entry in enumerate(entries):
            component = component_store.insert(
                parent_recipe_id,
                entry["child_recipe_id"],
                entry["servings_needed"],
                index,
                session,
            )
            created.append(_component_with_recipe(component))

        log_operation(
            logger,
            operation="set_components",
            outcome="success",
            parent_recipe_id=parent_recipe_id,
            removed=removed,
            added=len(created),
        )
        return created

    try:
        if session is not None:
            return _impl(session)
        with session_scope(write=True) as session:
            return _impl(session)

    except (RecipeNotFound, CircularReferenceError, DuplicateComponentError):
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to set components for recipe {parent_recipe_id}", e)


# ============================================================================
# Queries
# ============================================================================


def get_component(component_id: int, session=None) -> Dict:
    """
    Get one component edge with its child recipe.

    Raises:
        ComponentNotFound: If the edge doesn't exist
    """
    def _impl(session):
        component = component_store.get(component_id, session)
        if component is None:
            raise ComponentNotFound(component_id)
        return _component_with_recipe(component)

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except ComponentNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get recipe component {component_id}", e)


def get_components(recipe_id: int, session=None) -> List[Dict]:
    """
    Get the direct components of a recipe, ordered by sort_order.

    Raises:
        RecipeNotFound: If recipe doesn't exist
    """
    def _impl(session):
        recipe_service.get_recipe(recipe_id, session=session)
        return [
            _component_with_recipe(component)
            for component in component_store.list_children_of(recipe_id, session)
        ]

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get components for recipe {recipe_id}", e)


def get_recipes_using_component(recipe_id: int, session=None) -> List[Dict]:
    """
    Get all recipes that use a given recipe as a direct component.

    Raises:
        RecipeNotFound: If recipe doesn't exist
    """
    def _impl(session):
        recipe_service.get_recipe(recipe_id, session=session)
        return [parent.to_dict() for parent in component_store.list_parents_of(recipe_id, session)]

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get recipes using component {recipe_id}", e)


def _build_hierarchy(recipe_id: int, path: Set[int], session) -> List[Dict]:
    nodes = []
    for component in component_store.list_children_of(recipe_id, session):
        child = component.child_recipe

        if child.id in path:
            # Stored graph has a cycle; stop here instead of recursing forever
            log_operation(
                logger,
                operation="get_hierarchy",
                outcome="cycle_in_stored_graph",
                level=logging.WARNING,
                component_id=component.id,
                parent_recipe_id=recipe_id,
                child_recipe_id=child.id,
            )
            subcomponents = []
        else:
            subcomponents = _build_hierarchy(child.id, path | {child.id}, session)

        nodes.append(
            {
                "id": component.id,
                "parent_recipe_id": component.parent_recipe_id,
                "child_recipe_id": child.id,
                "servings_needed": component.servings_needed,
                "sort_order": component.sort_order,
                "recipe": child.to_dict(),
                "tags": child.tag_names,
                "components": subcomponents,
            }
        )
    return nodes


def get_hierarchy(recipe_id: int, session=None) -> List[Dict]:
    """
    Build the full nested component tree of a recipe.

    Each node is a dict:
        id, parent_recipe_id, child_recipe_id, servings_needed, sort_order,
        recipe (child recipe dict), tags (child tag names),
        components (the child's own nodes, same shape)

    Siblings are ordered by sort_order. A recipe with no components yields
    an empty list. If the stored graph contains a cycle, a recipe already on
    the current path is shown without children and a warning is logged.

    Raises:
        RecipeNotFound: If recipe doesn't exist
        DatabaseError: If database operation fails
    """
    def _impl(session):
        recipe_service.get_recipe(recipe_id, session=session)
        return _build_hierarchy(recipe_id, {recipe_id}, session)

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to build hierarchy for recipe {recipe_id}", e)


def get_aggregated_nutrition(recipe_id: int, session=None) -> Optional[Dict[str, float]]:
    """
    Per-serving nutrition of a recipe including its components.

    A recipe without components returns its own stored nutrition unchanged.
    Otherwise see nutrition_service.aggregate_nutrition().

    Returns:
        Nutrition dict, or None if nothing is known

    Raises:
        RecipeNotFound: If recipe doesn't exist
        DatabaseError: If database operation fails
    """
    def _impl(session):
        recipe = recipe_service.get_recipe(recipe_id, session=session)
        own_nutrition = dict(recipe.nutrition) if recipe.nutrition else None

        hierarchy = get_hierarchy(recipe_id, session=session)
        if not hierarchy:
            return own_nutrition

        return aggregate_nutrition(own_nutrition, hierarchy)

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as session:
            return _impl(session)

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to aggregate nutrition for recipe {recipe_id}", e)
