"""Pydantic models for the core timesheet entities."""

import math
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from jira_timesheet.utils.validation import TimestampStr, UrlStr, safe_validate

SECONDS_PER_HOUR = 3600


class User(BaseModel):
    """Jira user as seen by the timesheet tool."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: EmailStr
    display_name: str = Field(alias="displayName")
    avatar_url: UrlStr | None = Field(default=None, alias="avatarUrl")
    account_id: str = Field(alias="accountId")
    time_zone: str | None = Field(default=None, alias="timeZone")
    active: bool


class AvatarUrls(BaseModel):
    """Project avatar URLs keyed by pixel size."""

    model_config = ConfigDict(populate_by_name=True)

    size_16: UrlStr | None = Field(default=None, alias="16x16")
    size_24: UrlStr | None = Field(default=None, alias="24x24")
    size_32: UrlStr | None = Field(default=None, alias="32x32")
    size_48: UrlStr | None = Field(default=None, alias="48x48")


class Project(BaseModel):
    """Jira project model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    key: str
    name: str
    description: str | None = None
    lead: User | None = None
    project_type_key: str = Field(alias="projectTypeKey")
    avatar_urls: AvatarUrls | None = Field(default=None, alias="avatarUrls")
    is_selected: bool = Field(alias="isSelected")
    last_synced_at: str | None = Field(default=None, alias="lastSyncedAt")


class ProjectRef(BaseModel):
    """The id/key/name projection of a project carried by issues and entries."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    key: str
    name: str


class IssueType(BaseModel):
    """Issue type model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    icon_url: UrlStr | None = Field(default=None, alias="iconUrl")


class StatusCategory(BaseModel):
    """Status category model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    color_name: str = Field(alias="colorName")

    @property
    def is_done(self) -> bool:
        """Whether the category is Jira's resolved ("Done") category."""
        return self.id == "3" or self.name.lower() == "done"


class IssueStatus(BaseModel):
    """Issue status model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    status_category: StatusCategory = Field(alias="statusCategory")


class Priority(BaseModel):
    """Issue priority model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    icon_url: UrlStr | None = Field(default=None, alias="iconUrl")


class Issue(BaseModel):
    """Jira issue model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    key: str
    summary: str
    description: str | None = None
    issue_type: IssueType = Field(alias="issueType")
    status: IssueStatus
    priority: Priority | None = None
    assignee: User | None = None
    reporter: User | None = None
    project: ProjectRef
    created: str
    updated: str


class TimesheetEntry(BaseModel):
    """One logged unit of work, as synced from a Jira worklog.

    Entries are immutable snapshots. ``time_spent_seconds`` is the source of
    truth and ``time_spent_hours`` must agree with it.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    issue_id: str = Field(alias="issueId")
    issue: Issue
    author: User | None = None
    time_spent_seconds: int = Field(gt=0, alias="timeSpentSeconds")
    time_spent_hours: float = Field(gt=0, alias="timeSpentHours")
    description: str | None = None
    started: TimestampStr
    created: str
    updated: str
    project: ProjectRef
    worklog_id: str = Field(alias="worklogId")

    @model_validator(mode="after")
    def _check_hours_match_seconds(self) -> "TimesheetEntry":
        expected = self.time_spent_seconds / SECONDS_PER_HOUR
        if not math.isclose(self.time_spent_hours, expected, abs_tol=1e-6):
            raise ValueError(
                f"timeSpentHours ({self.time_spent_hours}) does not match "
                f"timeSpentSeconds / 3600 ({expected})"
            )
        return self

    @property
    def started_date(self) -> date:
        """Get the work date from the ``started`` timestamp."""
        return date.fromisoformat(self.started[:10])


def is_user(obj: Any) -> bool:
    return safe_validate(User, obj).success


def is_project(obj: Any) -> bool:
    return safe_validate(Project, obj).success


def is_issue(obj: Any) -> bool:
    return safe_validate(Issue, obj).success


def is_timesheet_entry(obj: Any) -> bool:
    return safe_validate(TimesheetEntry, obj).success
