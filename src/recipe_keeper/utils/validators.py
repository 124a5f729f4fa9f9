"""
Input validation functions for the Recipe Keeper application.

Validators return (is_valid, error_message) tuples so services can collect
every problem before raising a single ValidationError.
"""

import math
from numbers import Real
from typing import Any, Optional, Tuple

from .constants import (
    MAX_TITLE_LENGTH,
    ERROR_REQUIRED_FIELD,
    ERROR_INVALID_NUMBER,
    ERROR_INVALID_POSITIVE,
    ERROR_INVALID_NON_NEGATIVE,
    ERROR_INVALID_INTEGER,
)


def is_number(value: Any) -> bool:
    """True for finite real numbers; bools are rejected."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def validate_required_string(value: Optional[str], field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a string field is not empty.

    Args:
        value: The string value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return False, f"{field_name}: {ERROR_REQUIRED_FIELD}"
    if not isinstance(value, str):
        return False, f"{field_name}: Must be text"
    if len(value) > MAX_TITLE_LENGTH:
        return False, f"{field_name}: Must be {MAX_TITLE_LENGTH} characters or fewer"
    return True, ""


def validate_positive_number(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a value is a number greater than zero.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not is_number(value):
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
    if value <= 0:
        return False, f"{field_name}: {ERROR_INVALID_POSITIVE}"
    return True, ""


def validate_sort_order(value: Any, field_name: str = "Sort order") -> Tuple[bool, str]:
    """
    Validate that a value is a non-negative whole number.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{field_name}: {ERROR_INVALID_INTEGER}"
    if value < 0:
        return False, f"{field_name}: {ERROR_INVALID_NON_NEGATIVE}"
    return True, ""


def validate_servings(value: Any, field_name: str = "Servings") -> Tuple[bool, str]:
    """
    Validate an optional recipe servings count (None = unknown).

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None:
        return True, ""
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{field_name}: {ERROR_INVALID_INTEGER}"
    if value < 1:
        return False, f"{field_name}: {ERROR_INVALID_POSITIVE}"
    return True, ""


def validate_recipe_data(data: dict) -> Tuple[bool, list]:
    """
    Validate recipe creation data.

    Args:
        data: Dictionary with recipe fields

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    is_valid, error = validate_required_string(data.get("title"), "Title")
    if not is_valid:
        errors.append(error)

    is_valid, error = validate_servings(data.get("servings"))
    if not is_valid:
        errors.append(error)

    for field_name in ("ingredients", "instructions"):
        value = data.get(field_name, [])
        if not isinstance(value, list) or not all(isinstance(line, str) for line in value):
            errors.append(f"{field_name.capitalize()}: Must be a list of text lines")

    return len(errors) == 0, errors
