"""Tests for logging setup."""

import logging

import pytest

from typo3_console import setup_logging
from typo3_console.config import ConsoleConfig


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.mark.parametrize(
    "verbose, quiet, level",
    [(False, False, logging.WARNING), (True, False, logging.INFO), (False, True, logging.ERROR)],
)
def test_setup_logging_console_level(tmp_path, restore_root_logger, verbose, quiet, level):
    """Test the console handler level follows the flags."""
    setup_logging(verbose=verbose, quiet=quiet, config=ConsoleConfig(project_path=tmp_path))

    file_handler, console_handler = restore_root_logger.handlers
    assert isinstance(file_handler, logging.FileHandler)
    assert console_handler.level == level


def test_setup_logging_writes_log_file(tmp_path, restore_root_logger):
    """Test log records reach the file below the project."""
    setup_logging(config=ConsoleConfig(project_path=tmp_path, log_filename="test.log"))
    logging.getLogger("typo3_console.test").debug("hello from test")

    restore_root_logger.handlers[0].flush()
    assert "hello from test" in (tmp_path / "var" / "log" / "test.log").read_text()


def test_setup_logging_quiet_wins_over_verbose(tmp_path, restore_root_logger):
    """Test quiet keeps stderr at ERROR even when verbose is set."""
    setup_logging(verbose=True, quiet=True, config=ConsoleConfig(project_path=tmp_path))
    assert restore_root_logger.handlers[1].level == logging.ERROR
