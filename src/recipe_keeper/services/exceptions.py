"""Service layer exception classes for Recipe Keeper.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the application.

Exception Hierarchy:
    ServiceError (base)
    ├── NotFoundError
    │   ├── RecipeNotFound
    │   └── ComponentNotFound
    ├── CircularReferenceError
    ├── DuplicateComponentError
    ├── ValidationError
    └── DatabaseError
"""


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions inherit from this class.
    """

    pass


class NotFoundError(ServiceError):
    """Raised when a referenced record does not exist."""

    pass


class RecipeNotFound(NotFoundError):
    """Raised when a recipe cannot be found by ID.

    Example:
        >>> raise RecipeNotFound(42)
        RecipeNotFound: Recipe with ID 42 not found
    """

    def __init__(self, recipe_id: int):
        self.recipe_id = recipe_id
        super().__init__(f"Recipe with ID {recipe_id} not found")


class ComponentNotFound(NotFoundError):
    """Raised when a recipe component edge cannot be found by ID.

    Example:
        >>> raise ComponentNotFound(7)
        ComponentNotFound: Recipe component with ID 7 not found
    """

    def __init__(self, component_id: int):
        self.component_id = component_id
        super().__init__(f"Recipe component with ID {component_id} not found")


class CircularReferenceError(ServiceError):
    """Raised when adding a component would create a cycle.

    Self-reference (a recipe used as its own component) is the smallest cycle.

    Args:
        parent_recipe_id: Recipe that would use the component
        child_recipe_id: Recipe proposed as the component
    """

    def __init__(self, parent_recipe_id: int, child_recipe_id: int):
        self.parent_recipe_id = parent_recipe_id
        self.child_recipe_id = child_recipe_id
        if parent_recipe_id == child_recipe_id:
            message = f"Recipe {parent_recipe_id} cannot be a component of itself"
        else:
            message = (
                f"Adding recipe {child_recipe_id} as a component of recipe "
                f"{parent_recipe_id} would create a circular reference"
            )
        super().__init__(message)


class DuplicateComponentError(ServiceError):
    """Raised when a recipe is already a component of the same parent.

    Example:
        >>> raise DuplicateComponentError(1, 2)
        DuplicateComponentError: Recipe 2 is already a component of recipe 1
    """

    def __init__(self, parent_recipe_id: int, child_recipe_id: int):
        self.parent_recipe_id = parent_recipe_id
        self.child_recipe_id = child_recipe_id
        super().__init__(
            f"Recipe {child_recipe_id} is already a component of recipe {parent_recipe_id}"
        )


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, errors: list):
        self.errors = errors
        error_msg = "; ".join(errors)
        super().__init__(f"Validation failed: {error_msg}")


class DatabaseError(ServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
