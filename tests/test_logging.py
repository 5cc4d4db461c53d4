"""Tests for logging utilities."""

import logging
from io import StringIO

from graphwalk import GraphModel, bellman_ford, topological_sort
from graphwalk.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name.startswith("graphwalk.")


def test_get_logger_package_default():
    """Test that no name gives the package logger."""
    assert get_logger().name == "graphwalk"


def test_get_logger_keeps_package_names():
    """Test that module names inside the package are not prefixed twice."""
    assert get_logger("graphwalk.graphs.shortest").name == "graphwalk.graphs.shortest"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    handlers = list(logger1.handlers)
    logger2 = get_logger("test_module")
    assert logger1 is logger2
    assert logger2.handlers == handlers
    # Capture handlers added by the test runner subclass StreamHandler
    own = [h for h in logger2.handlers if type(h) is logging.StreamHandler]
    assert len(own) == 1


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_set_log_level():
    """Test that set_log_level updates logger levels."""
    logger = get_logger("test_module")

    set_log_level(logging.INFO)
    assert logger.level == logging.INFO

    set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")

    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG

        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging():
    """Test configure_logging function."""
    stream = StringIO()
    logger = get_logger("test_module")
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        logger.debug("Debug message")
    finally:
        configure_logging(level=logging.WARNING)

    output = stream.getvalue()
    assert "Debug message" in output
    assert "[DEBUG] graphwalk.test_module" in output


def test_configure_logging_custom_format():
    """Test a custom format string."""
    stream = StringIO()
    logger = get_logger("test_module")
    try:
        configure_logging(level=logging.INFO, format_string="%(levelname)s|%(message)s", stream=stream)
        logger.info("hello")
    finally:
        configure_logging(level=logging.WARNING)

    assert stream.getvalue().strip() == "INFO|hello"


def test_default_level_hides_info():
    """Test that INFO messages are silent at the default level."""
    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    try:
        get_logger("test_module").info("quiet")
    finally:
        configure_logging(level=logging.WARNING)
    assert stream.getvalue() == ""


def test_negative_cycle_is_logged():
    """Test that a detected negative cycle is reported at INFO."""
    stream = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=stream)
        bellman_ford(GraphModel(2, [(0, 1, 1), (1, 0, -2)]), 0)
    finally:
        configure_logging(level=logging.WARNING)

    output = stream.getvalue()
    assert "Negative cycle reachable from 0" in output
    assert "0 -> 1 -> 0" in output


def test_cyclic_ordering_is_logged():
    """Test that a stalled topological sort is reported at INFO."""
    stream = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=stream)
        topological_sort(GraphModel(2, [(0, 1), (1, 0)]))
    finally:
        configure_logging(level=logging.WARNING)

    assert "cycle detected" in stream.getvalue()


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False
