"""
Tests for the package logger setup.
"""

import logging

import pytest

from calcpad import logging_config


@pytest.fixture
def package_logger():
    logger = logging.getLogger(logging_config.LOGGER_NAME)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_console_only_by_default(package_logger):
    logger = logging_config.setup_logging(logging.DEBUG)
    assert logger is package_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_log_file_receives_package_messages(package_logger, tmp_path):
    log_file = tmp_path / "calcpad.log"
    logging_config.setup_logging(logging.INFO, log_file=str(log_file))
    logging.getLogger("calcpad.DocumentEngine").info("pass finished")

    assert len(package_logger.handlers) == 2
    for handler in package_logger.handlers:
        handler.flush()
    written = log_file.read_text(encoding="utf-8")
    assert "Logging initialized." in written
    assert "calcpad.DocumentEngine - INFO - pass finished" in written


def test_repeated_setup_does_not_stack_handlers(package_logger, tmp_path):
    logging_config.setup_logging(logging.INFO, log_file=str(tmp_path / "first.log"))
    logging_config.setup_logging(logging.WARNING)
    assert len(package_logger.handlers) == 1
    assert package_logger.handlers[0].level == logging.WARNING
