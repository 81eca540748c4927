"""Filter state models and their evaluation against timesheet entries."""

import calendar
import logging
from collections.abc import Iterable
from datetime import date, timedelta
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jira_timesheet.timesheet.models import TimesheetEntry
from jira_timesheet.utils.validation import DateStr, safe_validate, sanitize_search_text

logger = logging.getLogger(__name__)

DateRangeType = Literal[
    "custom", "today", "yesterday", "thisWeek", "lastWeek", "thisMonth", "lastMonth"
]


class DateRangeFilter(BaseModel):
    """Inclusive work-date range with the shortcut it was built from."""

    model_config = ConfigDict(populate_by_name=True)

    start_date: DateStr = Field(alias="startDate")
    end_date: DateStr = Field(alias="endDate")
    type: DateRangeType

    @model_validator(mode="after")
    def _check_order(self) -> "DateRangeFilter":
        if self.start_date > self.end_date:
            raise ValueError(f"startDate {self.start_date} is after endDate {self.end_date}")
        return self

    @classmethod
    def for_type(cls, range_type: DateRangeType, today: date | None = None) -> "DateRangeFilter":
        """Resolve a shortcut to concrete dates.

        Weeks start on Monday. ``custom`` resolves to today and is expected to
        be edited by the caller.

        Args:
            range_type: Shortcut name.
            today: Reference day. Defaults to ``date.today()``.

        Returns:
            Date range filter covering the shortcut.
        """
        today = today or date.today()
        if range_type == "yesterday":
            start = end = today - timedelta(days=1)
        elif range_type == "thisWeek":
            start = today - timedelta(days=today.weekday())
            end = start + timedelta(days=6)
        elif range_type == "lastWeek":
            start = today - timedelta(days=today.weekday() + 7)
            end = start + timedelta(days=6)
        elif range_type == "thisMonth":
            start = today.replace(day=1)
            end = today.replace(day=calendar.monthrange(today.year, today.month)[1])
        elif range_type == "lastMonth":
            end = today.replace(day=1) - timedelta(days=1)
            start = end.replace(day=1)
        else:
            start = end = today
        return cls(start_date=start.isoformat(), end_date=end.isoformat(), type=range_type)

    def contains(self, day: date) -> bool:
        return date.fromisoformat(self.start_date) <= day <= date.fromisoformat(self.end_date)


class ProjectFilter(BaseModel):
    """Project selection."""

    model_config = ConfigDict(populate_by_name=True)

    selected_project_ids: list[str] = Field(alias="selectedProjectIds")
    include_inactive: bool = Field(alias="includeInactive")


class UserFilter(BaseModel):
    """Author selection."""

    model_config = ConfigDict(populate_by_name=True)

    selected_user_ids: list[str] = Field(alias="selectedUserIds")
    include_inactive: bool = Field(alias="includeInactive")


class IssueTypeFilter(BaseModel):
    """Issue type selection."""

    model_config = ConfigDict(populate_by_name=True)

    selected_issue_type_ids: list[str] = Field(alias="selectedIssueTypeIds")


class StatusFilter(BaseModel):
    """Issue status selection."""

    model_config = ConfigDict(populate_by_name=True)

    selected_status_ids: list[str] = Field(alias="selectedStatusIds")
    include_resolved: bool = Field(alias="includeResolved")


class TextFilter(BaseModel):
    """Free-text search and the fields it looks in."""

    model_config = ConfigDict(populate_by_name=True)

    search_text: str = Field(alias="searchText")
    search_in_description: bool = Field(alias="searchInDescription")
    search_in_issue_summary: bool = Field(alias="searchInIssueSummary")
    search_in_issue_key: bool = Field(alias="searchInIssueKey")
    case_sensitive: bool = Field(alias="caseSensitive")

    def matches(self, entry: TimesheetEntry) -> bool:
        """Check whether the entry contains the search text in an enabled field.

        An empty search text, or one with no enabled field, matches everything.
        """
        needle = sanitize_search_text(self.search_text)
        haystacks = []
        if self.search_in_description:
            haystacks.append(entry.description or "")
        if self.search_in_issue_summary:
            haystacks.append(entry.issue.summary)
        if self.search_in_issue_key:
            haystacks.append(entry.issue.key)

        if not needle or not haystacks:
            return True

        if not self.case_sensitive:
            needle = needle.casefold()
            haystacks = [h.casefold() for h in haystacks]
        return any(needle in h for h in haystacks)


class FilterState(BaseModel):
    """Complete predicate over timesheet entries, built per request."""

    model_config = ConfigDict(populate_by_name=True)

    date_range: DateRangeFilter = Field(alias="dateRange")
    projects: ProjectFilter
    users: UserFilter
    issue_types: IssueTypeFilter = Field(alias="issueTypes")
    statuses: StatusFilter
    text_search: TextFilter = Field(alias="textSearch")
    min_hours: float | None = Field(default=None, gt=0, alias="minHours")
    max_hours: float | None = Field(default=None, gt=0, alias="maxHours")

    @model_validator(mode="after")
    def _check_hour_bounds(self) -> "FilterState":
        if (
            self.min_hours is not None
            and self.max_hours is not None
            and self.min_hours > self.max_hours
        ):
            raise ValueError(f"minHours ({self.min_hours}) exceeds maxHours ({self.max_hours})")
        return self

    def matches(self, entry: TimesheetEntry) -> bool:
        """Check whether a single entry satisfies every part of the filter."""
        if not self.date_range.contains(entry.started_date):
            return False

        project_ids = self.projects.selected_project_ids
        if project_ids and entry.project.id not in project_ids:
            return False

        user_ids = self.users.selected_user_ids
        author = entry.author
        if user_ids and (author is None or author.id not in user_ids):
            return False
        if not self.users.include_inactive and author is not None and not author.active:
            return False

        issue_type_ids = self.issue_types.selected_issue_type_ids
        if issue_type_ids and entry.issue.issue_type.id not in issue_type_ids:
            return False

        status = entry.issue.status
        status_ids = self.statuses.selected_status_ids
        if status_ids and status.id not in status_ids:
            return False
        if not self.statuses.include_resolved and status.status_category.is_done:
            return False

        if not self.text_search.matches(entry):
            return False

        if self.min_hours is not None and entry.time_spent_hours < self.min_hours:
            return False
        if self.max_hours is not None and entry.time_spent_hours > self.max_hours:
            return False

        return True


def apply_filters(entries: Iterable[TimesheetEntry], filters: FilterState) -> list[TimesheetEntry]:
    """Keep the entries matching ``filters``, preserving input order.

    Args:
        entries: Timesheet entries to filter.
        filters: Filter state to evaluate.

    Returns:
        Matching entries.
    """
    entries = list(entries)
    matched = [entry for entry in entries if filters.matches(entry)]
    logger.debug(f"Filter kept {len(matched)} of {len(entries)} entries")
    return matched


def create_default_filter_state(today: date | None = None) -> FilterState:
    """Build the filter shown on first load: today's worklogs, nothing excluded."""
    return FilterState(
        date_range=DateRangeFilter.for_type("today", today),
        projects=ProjectFilter(selected_project_ids=[], include_inactive=False),
        users=UserFilter(selected_user_ids=[], include_inactive=False),
        issue_types=IssueTypeFilter(selected_issue_type_ids=[]),
        statuses=StatusFilter(selected_status_ids=[], include_resolved=True),
        text_search=TextFilter(
            search_text="",
            search_in_description=True,
            search_in_issue_summary=True,
            search_in_issue_key=True,
            case_sensitive=False,
        ),
    )


def is_filter_state(obj: Any) -> bool:
    return safe_validate(FilterState, obj).success
