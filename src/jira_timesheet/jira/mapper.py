"""Convert raw Jira responses into the timesheet entity models."""

import logging

from jira_timesheet.jira.models import JiraIssue, JiraProject, JiraUser, JiraWorklog
from jira_timesheet.timesheet.models import (
    SECONDS_PER_HOUR,
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
)

logger = logging.getLogger(__name__)


def to_user(jira_user: JiraUser) -> User:
    """Convert a Jira user, keyed by account id."""
    return User(
        id=jira_user.account_id,
        email=jira_user.email_address,
        display_name=jira_user.display_name,
        avatar_url=jira_user.avatar_urls.size_48,
        account_id=jira_user.account_id,
        time_zone=jira_user.time_zone,
        active=jira_user.active,
    )


def to_project(jira_project: JiraProject, is_selected: bool = False) -> Project:
    """Convert a Jira project.

    Args:
        jira_project: Raw project.
        is_selected: Whether the project is part of the configured selection.

    Returns:
        Project model.
    """
    avatars = jira_project.avatar_urls
    return Project(
        id=jira_project.id,
        key=jira_project.key,
        name=jira_project.name,
        description=jira_project.description,
        lead=to_user(jira_project.lead) if jira_project.lead else None,
        project_type_key=jira_project.project_type_key,
        avatar_urls=AvatarUrls(
            size_16=avatars.size_16,
            size_24=avatars.size_24,
            size_32=avatars.size_32,
            size_48=avatars.size_48,
        ),
        is_selected=is_selected,
    )


def to_issue(jira_issue: JiraIssue) -> Issue:
    """Convert a Jira issue, flattening its ADF description to plain text."""
    fields = jira_issue.fields
    category = fields.status.status_category
    return Issue(
        id=jira_issue.id,
        key=jira_issue.key,
        summary=fields.summary,
        description=fields.description.plain_text if fields.description else None,
        issue_type=IssueType(
            id=fields.issuetype.id,
            name=fields.issuetype.name,
            icon_url=fields.issuetype.icon_url,
        ),
        status=IssueStatus(
            id=fields.status.id,
            name=fields.status.name,
            status_category=StatusCategory(
                id=category.id,
                name=category.name,
                color_name=category.color_name,
            ),
        ),
        priority=(
            Priority(id=fields.priority.id, name=fields.priority.name, icon_url=fields.priority.icon_url)
            if fields.priority
            else None
        ),
        assignee=to_user(fields.assignee) if fields.assignee else None,
        reporter=to_user(fields.reporter) if fields.reporter else None,
        project=ProjectRef(
            id=fields.project.id,
            key=fields.project.key,
            name=fields.project.name,
        ),
        created=fields.created,
        updated=fields.updated,
    )


def to_timesheet_entry(worklog: JiraWorklog, jira_issue: JiraIssue) -> TimesheetEntry:
    """Build a timesheet entry from a worklog and the issue it was logged on.

    Args:
        worklog: Raw Jira worklog.
        jira_issue: The issue the worklog belongs to.

    Returns:
        Timesheet entry keyed by the worklog id.

    Raises:
        ValueError: If the worklog does not belong to ``jira_issue``.
    """
    if worklog.issue_id != jira_issue.id:
        raise ValueError(
            f"Worklog {worklog.id} belongs to issue {worklog.issue_id}, not {jira_issue.id}"
        )

    issue = to_issue(jira_issue)
    logger.debug(f"Mapped worklog {worklog.id} on {issue.key} ({worklog.time_spent})")
    return TimesheetEntry(
        id=worklog.id,
        issue_id=issue.id,
        issue=issue,
        author=to_user(worklog.author),
        time_spent_seconds=worklog.time_spent_seconds,
        time_spent_hours=worklog.time_spent_seconds / SECONDS_PER_HOUR,
        description=worklog.description,
        started=worklog.started,
        created=worklog.created,
        updated=worklog.updated,
        project=issue.project,
        worklog_id=worklog.id,
    )
