"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_module_logger context binding
- Test logging suppression in test environment
"""

import logging

import pytest

from infrastructure.logging.setup import (
    _is_test_environment,
    configure_logging,
    get_module_logger,
)


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_detects_pytest_in_sys_modules(self):
        assert _is_test_environment() is True

    def test_configure_logging_returns_bound_logger(self, mock_settings):
        result = configure_logging(settings=mock_settings)

        assert hasattr(result, "info")
        assert hasattr(result, "warning")
        assert hasattr(result, "error")

    def test_logging_suppressed_in_tests(self, mock_settings):
        configure_logging(settings=mock_settings, log_level="DEBUG")
        assert logging.root.level > logging.CRITICAL

    def test_configure_logging_without_settings(self):
        assert configure_logging() is not None


@pytest.mark.unit
class TestLoggerHelpers:
    """Test suite for get_module_logger."""

    def test_get_module_logger_binds_calling_module(self):
        logger = get_module_logger()
        context = logger._context

        assert context["module_path"] == __name__
        assert context["component"] == __name__.split(".")[-1]
