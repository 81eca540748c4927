"""Pydantic models for raw Jira REST API responses."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from jira_timesheet.utils.validation import TimestampStr, UrlStr, safe_validate

HOURS_PER_DAY = 8
DAYS_PER_WEEK = 5

_TIME_SPENT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*([wdhm])")


def parse_jira_time_spent(time_spent: str) -> float:
    """Parse a Jira time-tracking string to hours.

    Jira counts a day as 8 hours and a week as 5 days.

    Args:
        time_spent: Duration as shown by Jira (e.g., '2h 30m', '1d 3h', '1w').

    Returns:
        Duration in hours as a float. Unrecognised text counts as zero.
    """
    if not time_spent:
        return 0.0

    total_hours = 0.0
    for amount, unit in _TIME_SPENT_PATTERN.findall(time_spent.lower()):
        value = float(amount)
        if unit == "w":
            total_hours += value * DAYS_PER_WEEK * HOURS_PER_DAY
        elif unit == "d":
            total_hours += value * HOURS_PER_DAY
        elif unit == "h":
            total_hours += value
        else:
            total_hours += value / 60

    return total_hours


def format_hours_as_jira_time(hours: float) -> str:
    """Format hours as a Jira time string with minute resolution.

    Args:
        hours: Non-negative duration in hours.

    Returns:
        String such as '2h 30m', '45m' or '0m'.

    Raises:
        ValueError: If ``hours`` is negative.
    """
    if hours < 0:
        raise ValueError(f"Cannot format negative duration: {hours}")

    whole_hours, minutes = divmod(round(hours * 60), 60)
    if whole_hours == 0 and minutes == 0:
        return "0m"

    parts = []
    if whole_hours > 0:
        parts.append(f"{whole_hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    return " ".join(parts)


class JiraAvatarUrls(BaseModel):
    """Avatar URLs as returned by Jira, all sizes present."""

    model_config = ConfigDict(populate_by_name=True)

    size_16: UrlStr = Field(alias="16x16")
    size_24: UrlStr = Field(alias="24x24")
    size_32: UrlStr = Field(alias="32x32")
    size_48: UrlStr = Field(alias="48x48")


class JiraUser(BaseModel):
    """Jira user model."""

    model_config = ConfigDict(populate_by_name=True)

    account_id: str = Field(alias="accountId")
    email_address: EmailStr = Field(alias="emailAddress")
    display_name: str = Field(alias="displayName")
    active: bool
    time_zone: str | None = Field(default=None, alias="timeZone")
    avatar_urls: JiraAvatarUrls = Field(alias="avatarUrls")


class JiraProject(BaseModel):
    """Jira project model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    key: str
    name: str
    description: str | None = None
    project_type_key: str = Field(alias="projectTypeKey")
    lead: JiraUser | None = None
    avatar_urls: JiraAvatarUrls = Field(alias="avatarUrls")


class JiraIssueType(BaseModel):
    """Jira issue type model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    icon_url: UrlStr = Field(alias="iconUrl")
    subtask: bool


class JiraStatusCategory(BaseModel):
    """Jira status category model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    key: str
    color_name: str = Field(alias="colorName")
    name: str


class JiraStatus(BaseModel):
    """Jira status model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    status_category: JiraStatusCategory = Field(alias="statusCategory")


class JiraPriority(BaseModel):
    """Jira priority model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    icon_url: UrlStr = Field(alias="iconUrl")


class JiraDocument(BaseModel):
    """Atlassian Document Format body (issue descriptions, comments)."""

    model_config = ConfigDict(populate_by_name=True)

    type: str
    version: int
    content: list[Any]

    @property
    def plain_text(self) -> str:
        """Concatenate the text nodes, one line per top-level block."""
        return "\n".join(
            text for text in (_collect_text(block) for block in self.content) if text
        )


def _collect_text(node: Any) -> str:
    if not isinstance(node, dict):
        return ""
    if node.get("type") == "text":
        return node.get("text", "")
    return "".join(_collect_text(child) for child in node.get("content", []))


class JiraIssueFields(BaseModel):
    """The ``fields`` object of a Jira issue."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str
    description: JiraDocument | None = None
    issuetype: JiraIssueType
    status: JiraStatus
    priority: JiraPriority | None = None
    assignee: JiraUser | None = None
    reporter: JiraUser | None = None
    project: JiraProject
    created: str
    updated: str


class JiraIssue(BaseModel):
    """Jira issue model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    key: str
    fields: JiraIssueFields


class JiraWorklog(BaseModel):
    """Jira worklog model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    issue_id: str = Field(alias="issueId")
    author: JiraUser
    time_spent: str = Field(alias="timeSpent")
    time_spent_seconds: int = Field(gt=0, alias="timeSpentSeconds")
    description: str | None = None
    started: TimestampStr
    created: str
    updated: str

    @property
    def time_spent_hours(self) -> float:
        """Get duration in hours from the seconds field."""
        return self.time_spent_seconds / 3600


class JiraWorklogSearchResult(BaseModel):
    """Paged worklog search response."""

    model_config = ConfigDict(populate_by_name=True)

    worklogs: list[JiraWorklog]
    total: int
    max_results: int = Field(alias="maxResults")
    start_at: int = Field(alias="startAt")

    @property
    def has_more(self) -> bool:
        return self.start_at + len(self.worklogs) < self.total


class JiraProjectSearchResult(BaseModel):
    """Paged project search response."""

    model_config = ConfigDict(populate_by_name=True)

    projects: list[JiraProject]
    total: int
    max_results: int = Field(alias="maxResults")
    start_at: int = Field(alias="startAt")


class JiraUserSearchResult(BaseModel):
    """Paged user search response."""

    model_config = ConfigDict(populate_by_name=True)

    users: list[JiraUser]
    total: int
    max_results: int = Field(alias="maxResults")
    start_at: int = Field(alias="startAt")


class JiraApiConfig(BaseModel):
    """Connection settings handed to a Jira client."""

    model_config = ConfigDict(populate_by_name=True)

    base_url: UrlStr = Field(alias="baseUrl")
    email: EmailStr
    api_token: str = Field(min_length=1, alias="apiToken")
    max_retries: int = Field(default=3, ge=0, alias="maxRetries")
    retry_delay: float = Field(default=1.0, ge=0, alias="retryDelay")
    request_timeout: float = Field(default=30.0, gt=0, alias="requestTimeout")
    max_concurrent_requests: int = Field(default=5, gt=0, alias="maxConcurrentRequests")


class JiraApiError(BaseModel):
    """Error body returned by the Jira REST API."""

    model_config = ConfigDict(populate_by_name=True)

    error_messages: list[str] = Field(default_factory=list, alias="errorMessages")
    errors: dict[str, str] = Field(default_factory=dict)
    status: int

    def __str__(self) -> str:
        messages = self.error_messages + [f"{k}: {v}" for k, v in self.errors.items()]
        return f"Jira API error {self.status}: {'; '.join(messages) or 'no details'}"


def is_jira_user(obj: Any) -> bool:
    return safe_validate(JiraUser, obj).success


def is_jira_project(obj: Any) -> bool:
    return safe_validate(JiraProject, obj).success


def is_jira_worklog(obj: Any) -> bool:
    return safe_validate(JiraWorklog, obj).success


def is_jira_issue(obj: Any) -> bool:
    return safe_validate(JiraIssue, obj).success
