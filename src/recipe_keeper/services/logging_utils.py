"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across the component and recipe services.

Usage:
    from recipe_keeper.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="add_component",
        outcome="success",
        parent_recipe_id=12,
        child_recipe_id=4,
    )

    log_operation(
        logger,
        operation="add_component",
        outcome="circular_reference",
        level=logging.WARNING,
        parent_recipe_id=4,
        child_recipe_id=12,
    )
"""

import logging
from typing import Any


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger under the 'recipe_keeper.services' prefix.

    Example:
        >>> logger = get_service_logger("recipe_keeper.services.recipe_component_service")
        >>> logger.name
        'recipe_keeper.services.recipe_component_service'
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"recipe_keeper.services.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The context is passed via the 'extra' parameter for structured logging
    and is also rendered into the message so plain handlers show it.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "add_component", "get_hierarchy")
        outcome: Outcome description (e.g., "success", "cycle_in_stored_graph")
        level: Log level (default: INFO). Use DEBUG for frequent reads.
        **context: Additional context fields (entity IDs, error details, etc.)
            Common fields:
            - parent_recipe_id / child_recipe_id: Edge endpoints
            - component_id: Edge being updated or removed
            - recipe_id: Recipe being read
            - error: Error message if outcome is "error"
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    details = " ".join(f"{key}={value}" for key, value in context.items())
    message = f"{operation}: {outcome}"
    if details:
        message = f"{message} ({details})"
    logger.log(level, message, extra=extra)
