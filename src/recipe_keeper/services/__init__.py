"""Services package - Business logic layer for Recipe Keeper.

Architecture:
- Services: Stateless functions organized by domain
- Transactions: Managed via session_scope(); pass session= to join a
  caller's transaction
- Exceptions: Consistent error handling via the ServiceError hierarchy
- Validation: Input validation before database operations

Service Modules:
- recipe_service: Recipe records, tags and stored nutrition
- component_store: Query helpers for component edges
- recipe_component_service: Cycle checks, component edits, hierarchy and
  aggregated nutrition
- nutrition_service: Pure nutrition cleanup and aggregation

Infrastructure:
- database: Engine, sessions and write-locked transactions
- exceptions: Service layer exception classes
- logging_utils: Structured operation logging
"""

from . import (
    database,
    recipe_service,
    component_store,
    recipe_component_service,
    nutrition_service,
)

from .recipe_component_service import (
    would_create_cycle,
    add_component,
    update_component,
    remove_component,
    set_components,
    get_component,
    get_components,
    get_recipes_using_component,
    get_hierarchy,
    get_aggregated_nutrition,
)
from .recipe_service import (
    create_recipe,
    get_recipe,
    get_recipes_by_ids,
    set_recipe_nutrition,
    delete_recipe,
)
from .database import session_scope, initialize_app_database
from .nutrition_service import aggregate_nutrition, sanitize_nutrition

from .exceptions import (
    ServiceError,
    NotFoundError,
    RecipeNotFound,
    ComponentNotFound,
    CircularReferenceError,
    DuplicateComponentError,
    ValidationError,
    DatabaseError,
)

__all__ = [
    # Modules
    "database",
    "recipe_service",
    "component_store",
    "recipe_component_service",
    "nutrition_service",
    # Component operations
    "would_create_cycle",
    "add_component",
    "update_component",
    "remove_component",
    "set_components",
    "get_component",
    "get_components",
    "get_recipes_using_component",
    "get_hierarchy",
    "get_aggregated_nutrition",
    # Recipe store
    "create_recipe",
    "get_recipe",
    "get_recipes_by_ids",
    "set_recipe_nutrition",
    "delete_recipe",
    # Database
    "session_scope",
    "initialize_app_database",
    # Nutrition
    "aggregate_nutrition",
    "sanitize_nutrition",
    # Exceptions
    "ServiceError",
    "NotFoundError",
    "RecipeNotFound",
    "ComponentNotFound",
    "CircularReferenceError",
    "DuplicateComponentError",
    "ValidationError",
    "DatabaseError",
]
