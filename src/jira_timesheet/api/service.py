"""Assemble API responses from timesheet entries."""

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from jira_timesheet.api.models import (
    API_ENDPOINTS,
    HTTP_STATUS,
    AppConfig,
    DailyBreakdown,
    ErrorResponse,
    Pagination,
    ProjectBreakdown,
    SummaryDateRange,
    SummaryResponse,
    TimesheetsRequest,
    TimesheetsResponse,
    UserBreakdown,
)
from jira_timesheet.filtering import FilterState, apply_filters
from jira_timesheet.grouping.builder import GroupKey, build_group_tree, group_key_for
from jira_timesheet.grouping.models import GroupingLevel
from jira_timesheet.timesheet.models import TimesheetEntry
from jira_timesheet.utils.validation import ValidationError, validate_data

logger = logging.getLogger(__name__)

_BREAKDOWN_LEVELS = {
    "project": GroupingLevel(dimension="project", sort_by="hours", sort_order="desc"),
    "user": GroupingLevel(dimension="user", sort_by="hours", sort_order="desc"),
    "day": GroupingLevel(
        dimension="date", sort_by="date", sort_order="asc", date_grouping_type="day"
    ),
}


def _breakdown(
    entries: list[TimesheetEntry], level: GroupingLevel
) -> list[tuple[GroupKey, float, int]]:
    """Total hours and entry counts per bucket, in first-seen order."""
    totals: dict[str, tuple[GroupKey, list[float]]] = {}
    for entry in entries:
        group_key = group_key_for(entry, level)
        if group_key.key not in totals:
            totals[group_key.key] = (group_key, [])
        totals[group_key.key][1].append(entry.time_spent_hours)
    return [(group_key, math.fsum(hours), len(hours)) for group_key, hours in totals.values()]


def build_error_response(
    error: Exception,
    status_code: int,
    path: str | None = None,
) -> ErrorResponse:
    """Convert an exception into the API error body.

    Args:
        error: The exception raised while handling the request.
        status_code: HTTP status to report.
        path: Request path, if known.

    Returns:
        Error response. Validation errors list their field errors in ``details``.
    """
    details = None
    if isinstance(error, ValidationError) and error.errors:
        details = {"errors": [field_error.model_dump() for field_error in error.errors]}

    return ErrorResponse(
        error=HTTPStatus(status_code).phrase,
        message=str(error),
        status_code=status_code,
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=path,
        details=details,
    )


class TimesheetService:
    """Filters, groups and paginates timesheet entries for API responses."""

    def __init__(self, app_config: AppConfig | None = None) -> None:
        """Initialize the service.

        Args:
            app_config: Application settings. Defaults to built-in settings.
        """
        self.app_config = app_config or AppConfig()

    def _filter(self, entries: Iterable[TimesheetEntry], filters: FilterState) -> list[TimesheetEntry]:
        if not self.app_config.features.enable_filtering:
            return list(entries)
        return apply_filters(entries, filters)

    def get_timesheets(
        self,
        entries: Iterable[TimesheetEntry],
        request: TimesheetsRequest,
        last_synced_at: str | None = None,
    ) -> TimesheetsResponse:
        """Build one page of the timesheet.

        Totals and the grouped forest cover every matching entry; only the
        ``entries`` list is paginated.

        Args:
            entries: All synced entries.
            request: Validated timesheets request.
            last_synced_at: Timestamp of the last worklog sync.

        Returns:
            Timesheets response.
        """
        matched = self._filter(entries, request.filters)

        grouped_data = None
        if self.app_config.features.enable_grouping:
            grouped_data = build_group_tree(matched, request.grouping).nodes

        limit = request.limit or self.app_config.default_page_size
        page = request.page or 1
        total_entries = len(matched)
        total_pages = max(1, math.ceil(total_entries / limit))
        offset = (page - 1) * limit

        logger.info(
            f"Timesheet page {page}/{total_pages}: {total_entries} matching entries"
        )

        return TimesheetsResponse(
            entries=matched[offset : offset + limit],
            total_entries=total_entries,
            total_hours=math.fsum(entry.time_spent_hours for entry in matched),
            grouped_data=grouped_data,
            pagination=Pagination(
                page=page,
                limit=limit,
                total_pages=total_pages,
                has_next_page=page < total_pages,
                has_previous_page=page > 1,
            ),
            filters=request.filters,
            grouping=request.grouping,
            last_synced_at=last_synced_at,
        )

    def get_summary(self, entries: Iterable[TimesheetEntry], filters: FilterState) -> SummaryResponse:
        """Summarize matching entries by project, user and day.

        Project and user breakdowns are ordered by hours descending; the daily
        breakdown is chronological.
        """
        matched = self._filter(entries, filters)

        projects = [
            ProjectBreakdown(
                project_id=group_key.key,
                project_name=group_key.display_name,
                hours=hours,
                entries=count,
            )
            for group_key, hours, count in _breakdown(matched, _BREAKDOWN_LEVELS["project"])
        ]
        users = [
            UserBreakdown(
                user_id=group_key.value,
                user_name=group_key.display_name,
                hours=hours,
                entries=count,
            )
            for group_key, hours, count in _breakdown(matched, _BREAKDOWN_LEVELS["user"])
        ]
        days = [
            DailyBreakdown(date=group_key.key, hours=hours, entries=count)
            for group_key, hours, count in _breakdown(matched, _BREAKDOWN_LEVELS["day"])
        ]

        projects.sort(key=lambda item: item.hours, reverse=True)
        users.sort(key=lambda item: item.hours, reverse=True)
        days.sort(key=lambda item: item.date)

        return SummaryResponse(
            total_hours=math.fsum(entry.time_spent_hours for entry in matched),
            total_entries=len(matched),
            date_range=SummaryDateRange(
                start=filters.date_range.start_date,
                end=filters.date_range.end_date,
            ),
            project_breakdown=projects,
            user_breakdown=users,
            daily_breakdown=days,
        )

    def handle_timesheets_request(
        self,
        entries: Iterable[TimesheetEntry],
        payload: Any,
        last_synced_at: str | None = None,
    ) -> dict[str, Any]:
        """Validate a raw request body and return the JSON-ready response body.

        Invalid payloads produce an error body with status 400 instead of raising.
        """
        path = API_ENDPOINTS["TIMESHEETS"]["LIST"]
        try:
            request = validate_data(TimesheetsRequest, payload, "Invalid timesheets request")
        except ValidationError as e:
            logger.warning(f"Rejected timesheets request: {e}")
            response = build_error_response(e, HTTP_STATUS["BAD_REQUEST"], path)
            return response.model_dump(by_alias=True, exclude_none=True)

        response = self.get_timesheets(entries, request, last_synced_at)
        return response.model_dump(by_alias=True, exclude_none=True)
