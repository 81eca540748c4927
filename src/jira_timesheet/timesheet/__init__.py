"""Core timesheet entities."""

from jira_timesheet.timesheet.models import (
    AvatarUrls,
    Issue,
    IssueStatus,
    IssueType,
    Priority,
    Project,
    ProjectRef,
    StatusCategory,
    TimesheetEntry,
    User,
    is_issue,
    is_project,
    is_timesheet_entry,
    is_user,
)

__all__ = [
    "AvatarUrls",
    "Issue",
    "IssueStatus",
    "IssueType",
    "Priority",
    "Project",
    "ProjectRef",
    "StatusCategory",
    "TimesheetEntry",
    "User",
    "is_issue",
    "is_project",
    "is_timesheet_entry",
    "is_user",
]
