"""Tests for logging setup."""

import logging
from pathlib import Path

import pytest

from jira_timesheet.utils import get_logger, setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if type(handler) in (logging.FileHandler, logging.StreamHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestSetupLogging:
    """Test handler levels for the file and the console."""

    def test_console_defaults_to_warnings(self, root_logger: logging.Logger, temp_config_dir: Path) -> None:
        setup_logging(config_dir=temp_config_dir)

        file_handler, console_handler = root_logger.handlers
        assert isinstance(file_handler, logging.FileHandler)
        assert file_handler.level == logging.INFO
        assert console_handler.level == logging.WARNING
        assert root_logger.level == logging.INFO

    def test_info_reaches_log_file(self, root_logger: logging.Logger, temp_config_dir: Path) -> None:
        setup_logging(config_dir=temp_config_dir)

        get_logger("jira_timesheet.test").info("Saved default grouping")
        for handler in root_logger.handlers:
            handler.flush()

        log_text = (temp_config_dir / "jira-timesheet.log").read_text()
        assert "INFO - Saved default grouping" in log_text

    def test_verbose_levels(self, root_logger: logging.Logger, temp_config_dir: Path) -> None:
        setup_logging(log_level=logging.DEBUG, config_dir=temp_config_dir, console_level=logging.DEBUG)

        assert root_logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in root_logger.handlers)
