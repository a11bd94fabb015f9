"""Tests for logging utilities."""

import logging
from io import StringIO

import pytest

from quasifit.logging import configure_logging, get_logger, set_log_level


def test_get_logger_returns_namespaced_logger():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "quasifit.test_module"


def test_get_logger_keeps_package_names():
    assert get_logger("quasifit.models.driver").name == "quasifit.models.driver"
    assert get_logger().name == "quasifit"


def test_get_logger_caching():
    assert get_logger("test_module") is get_logger("test_module")


def test_logger_does_not_propagate():
    assert get_logger("test_module").propagate is False


def test_set_log_level_accepts_names():
    logger = get_logger("test_module")
    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG
    set_log_level(logging.ERROR)
    assert logger.level == logging.ERROR


def test_configure_logging_redirects_output():
    logger = get_logger("test_module")
    stream = StringIO()
    configure_logging(level="INFO", stream=stream, format_string="%(levelname)s|%(message)s")
    logger.info("Fitting 3 parameters")
    logger.debug("hidden")
    assert stream.getvalue() == "INFO|Fitting 3 parameters\n"


def test_unknown_level_name_raises():
    with pytest.raises(ValueError, match="Unknown log level"):
        set_log_level("VERBOSE")


def test_loggers_created_after_configuration_inherit_it():
    stream = StringIO()
    configure_logging(level="INFO", stream=stream, format_string="%(name)s|%(message)s")
    get_logger("late_module").info("ready")
    assert stream.getvalue() == "quasifit.late_module|ready\n"
