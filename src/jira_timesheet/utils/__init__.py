"""Utility modules for jira-timesheet."""

from jira_timesheet.utils.logging import get_logger, setup_logging
from jira_timesheet.utils.storage import StorageManager
from jira_timesheet.utils.validation import ValidationError, safe_validate, validate_data

__all__ = [
    "get_logger",
    "setup_logging",
    "StorageManager",
    "ValidationError",
    "safe_validate",
    "validate_data",
]
