"""Jira REST response shapes and their conversion to timesheet entities."""

from jira_timesheet.jira.mapper import to_issue, to_project, to_timesheet_entry, to_user
from jira_timesheet.jira.models import (
    JiraApiConfig,
    JiraApiError,
    JiraIssue,
    JiraProject,
    JiraUser,
    JiraWorklog,
    JiraWorklogSearchResult,
    format_hours_as_jira_time,
    parse_jira_time_spent,
)

__all__ = [
    "JiraApiConfig",
    "JiraApiError",
    "JiraIssue",
    "JiraProject",
    "JiraUser",
    "JiraWorklog",
    "JiraWorklogSearchResult",
    "format_hours_as_jira_time",
    "parse_jira_time_spent",
    "to_issue",
    "to_project",
    "to_timesheet_entry",
    "to_user",
]
