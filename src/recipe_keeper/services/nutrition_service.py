"""
Nutrition Service - per-serving nutrition cleanup and aggregation.

Nutrition values are sparse dicts keyed by NUTRITION_FIELDS. A missing key
means the value is unknown; it is never treated as zero.

Functions here are pure: they take plain dicts (as produced by
Recipe.to_dict() and the component hierarchy) and never touch the database.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from recipe_keeper.utils.constants import NUTRITION_FIELDS, NUTRITION_PRECISION
from recipe_keeper.utils.validators import is_number

_QUANTUM = Decimal(1).scaleb(-NUTRITION_PRECISION)


def round_nutrition_value(value: float) -> float:
    """Round half-up to NUTRITION_PRECISION decimal places."""
    return float(Decimal(str(value)).quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def sanitize_nutrition(data: Optional[Dict[str, Any]]) -> Optional[Dict[str, float]]:
    """
    Keep only known nutrition fields holding finite, non-negative numbers.

    Args:
        data: Raw nutrition dict (e.g. from user input or an estimator)

    Returns:
        Dict of rounded values in NUTRITION_FIELDS order, or None if no
        valid field remains
    """
    if not data:
        return None

    sanitized = {}
    for field in NUTRITION_FIELDS:
        value = data.get(field)
        if is_number(value) and value >= 0:
            sanitized[field] = round_nutrition_value(value)

    return sanitized or None


def _add_scaled(totals: Dict[str, float], nutrition: Dict[str, Any], scale: float) -> None:
    for field in NUTRITION_FIELDS:
        value = nutrition.get(field)
        if not is_number(value):
            continue
        totals[field] = totals.get(field, 0.0) + float(value) * scale


def aggregate_nutrition(
    root_nutrition: Optional[Dict[str, Any]], hierarchy: List[Dict[str, Any]]
) -> Optional[Dict[str, float]]:
    """
    Combine a recipe's own per-serving nutrition with its direct components.

    Each direct component contributes its per-serving values scaled by
    servings_needed / child servings. Grandchildren are not visited: a
    child's stored nutrition already covers its own components, so walking
    further would count them twice.

    A component whose recipe has no recorded servings, or no nutrition,
    contributes nothing.

    Args:
        root_nutrition: The root recipe's own nutrition dict, or None
        hierarchy: Component nodes from get_hierarchy(); each node needs
            "servings_needed" and "recipe" (with "servings" and "nutrition")

    Returns:
        Dict of values rounded to one decimal place, or None when no field
        could be derived from the root or any component

    Example:
        >>> node = {"servings_needed": 2, "recipe": {"servings": 4,
        ...         "nutrition": {"calories": 800, "protein": 40}}}
        >>> aggregate_nutrition(None, [node])
        {'calories': 400.0, 'protein': 20.0}
    """
    totals: Dict[str, float] = {}

    if root_nutrition:
        _add_scaled(totals, root_nutrition, 1.0)

    for node in hierarchy:
        recipe = node.get("recipe") or {}
        child_servings = recipe.get("servings")
        child_nutrition = recipe.get("nutrition")

        if not child_nutrition or not is_number(child_servings) or child_servings <= 0:
            continue

        scale = float(node["servings_needed"]) / child_servings
        _add_scaled(totals, child_nutrition, scale)

    if not totals:
        return None

    return {
        field: round_nutrition_value(totals[field]) for field in NUTRITION_FIELDS if field in totals
    }
