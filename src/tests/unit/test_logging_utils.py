"""Tests for service layer structured logging."""

import logging

from recipe_keeper.services.logging_utils import get_service_logger, log_operation


class TestLoggingUtilities:
    """Tests for logging utility functions."""

    def test_get_service_logger_returns_logger(self):
        """get_service_logger returns a configured Logger instance."""
        logger = get_service_logger("test_module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "recipe_keeper.services.test_module"

    def test_get_service_logger_extracts_module_name(self):
        """get_service_logger extracts module name from full path."""
        logger = get_service_logger("recipe_keeper.services.recipe_component_service")
        assert logger.name == "recipe_keeper.services.recipe_component_service"

    def test_log_operation_logs_at_info_level(self, caplog):
        """log_operation logs at INFO level by default."""
        logger = get_service_logger("test")

        with caplog.at_level(logging.INFO):
            log_operation(logger, operation="test_op", outcome="success", component_id=123)

        assert "test_op: success (component_id=123)" in caplog.text
        assert caplog.records[-1].levelno == logging.INFO

    def test_log_operation_logs_at_custom_level(self, caplog):
        """log_operation respects custom log level."""
        logger = get_service_logger("test")

        with caplog.at_level(logging.DEBUG):
            log_operation(logger, operation="debug_op", outcome="read", level=logging.DEBUG)

        record = caplog.records[-1]
        assert record.levelno == logging.DEBUG
        assert record.getMessage() == "debug_op: read"

    def test_log_operation_includes_context_in_extra(self, caplog):
        """Context fields are attached to the log record."""
        logger = get_service_logger("test")

        with caplog.at_level(logging.INFO):
            log_operation(
                logger,
                operation="add_component",
                outcome="success",
                parent_recipe_id=1,
                child_recipe_id=2,
            )

        record = caplog.records[-1]
        assert record.operation == "add_component"
        assert record.outcome == "success"
        assert record.parent_recipe_id == 1
        assert record.child_recipe_id == 2
