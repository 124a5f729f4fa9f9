"""
Constants for the Recipe Keeper application.

This module defines system-wide constants including:
- Application metadata
- Nutrition fields and rounding
- Validation limits for component edges
"""

from typing import List

# ============================================================================
# Application Metadata
# ============================================================================

APP_VERSION = "0.1.0"
DATABASE_FILENAME = "recipe_keeper.db"

# ============================================================================
# Nutrition
# ============================================================================

# Per-serving nutrition fields, in display order
NUTRITION_FIELDS: List[str] = [
    "calories",
    "protein",
    "carbohydrates",
    "fat",
    "saturatedFat",
    "fiber",
    "sugar",
    "sodium",
    "cholesterol",
]

# Decimal places kept on stored and aggregated nutrition values
NUTRITION_PRECISION = 1

# ============================================================================
# Recipe Components
# ============================================================================

DEFAULT_SERVINGS_NEEDED = 1.0

# ============================================================================
# Validation Limits
# ============================================================================

MAX_TITLE_LENGTH = 200
MAX_TAG_LENGTH = 100

ERROR_REQUIRED_FIELD = "This field is required"
ERROR_INVALID_NUMBER = "Must be a valid number"
ERROR_INVALID_POSITIVE = "Must be greater than zero"
ERROR_INVALID_NON_NEGATIVE = "Must be zero or greater"
ERROR_INVALID_INTEGER = "Must be a whole number"
