"""Request and response envelopes for the timesheet HTTP API."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from jira_timesheet.filtering import FilterState
from jira_timesheet.grouping.models import GroupingConfig, GroupNode
from jira_timesheet.timesheet.models import Project, TimesheetEntry, User
from jira_timesheet.utils.validation import FieldError, UrlStr, safe_validate

ExportFormat = Literal["csv", "excel", "pdf"]

LoadingState = Literal["idle", "loading", "success", "error"]

MAX_PAGE_LIMIT = 1000

API_ENDPOINTS: dict[str, dict[str, str]] = {
    "AUTH": {
        "LOGIN": "/api/auth/login",
        "LOGOUT": "/api/auth/logout",
        "STATUS": "/api/auth/status",
    },
    "PROJECTS": {
        "LIST": "/api/projects",
        "CONFIG": "/api/projects/config",
        "SYNC": "/api/projects/sync",
    },
    "TIMESHEETS": {
        "LIST": "/api/timesheets",
        "REFRESH": "/api/timesheets/refresh",
        "SUMMARY": "/api/timesheets/summary",
    },
    "EXPORT": {
        "CSV": "/api/export/csv",
        "EXCEL": "/api/export/excel",
        "PDF": "/api/export/pdf",
    },
    "USERS": {
        "LIST": "/api/users",
    },
}

HTTP_STATUS: dict[str, int] = {
    "OK": 200,
    "CREATED": 201,
    "BAD_REQUEST": 400,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "UNPROCESSABLE_ENTITY": 422,
    "INTERNAL_SERVER_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}


# Requests


class AuthenticationRequest(BaseModel):
    """Credentials for connecting to a Jira site."""

    model_config = ConfigDict(populate_by_name=True)

    jira_url: UrlStr = Field(alias="jiraUrl")
    email: EmailStr
    api_token: str = Field(min_length=1, alias="apiToken")


class RefreshDataRequest(BaseModel):
    """Ask for a worklog re-sync."""

    model_config = ConfigDict(populate_by_name=True)

    force_full_sync: bool | None = Field(default=None, alias="forceFullSync")
    project_ids: list[str] | None = Field(default=None, alias="projectIds")


class TimesheetsRequest(BaseModel):
    """Query for a filtered, grouped and paginated timesheet."""

    model_config = ConfigDict(populate_by_name=True)

    filters: FilterState
    grouping: GroupingConfig
    page: int | None = Field(default=None, gt=0)
    limit: int | None = Field(default=None, gt=0, le=MAX_PAGE_LIMIT)
    include_issue_details: bool | None = Field(default=None, alias="includeIssueDetails")


class ProjectConfigRequest(BaseModel):
    """Replace the set of projects the tool syncs."""

    model_config = ConfigDict(populate_by_name=True)

    selected_project_ids: list[str] = Field(alias="selectedProjectIds")


class ExportRequest(BaseModel):
    """Export the filtered, grouped timesheet to a file."""

    model_config = ConfigDict(populate_by_name=True)

    filters: FilterState
    grouping: GroupingConfig
    format: ExportFormat
    include_details: bool = Field(alias="includeDetails")
    file_name: str | None = Field(default=None, alias="fileName")


# Responses


class AuthenticationResponse(BaseModel):
    """Result of a connection attempt."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    user: User | None = None
    available_projects: list[Project] | None = Field(default=None, alias="availableProjects")
    error: str | None = None


class Pagination(BaseModel):
    """Page position of a timesheet response."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")
    has_next_page: bool = Field(alias="hasNextPage")
    has_previous_page: bool = Field(alias="hasPreviousPage")


class TimesheetsResponse(BaseModel):
    """One page of entries plus totals and the grouped forest over all matches."""

    model_config = ConfigDict(populate_by_name=True)

    entries: list[TimesheetEntry]
    total_entries: int = Field(alias="totalEntries")
    total_hours: float = Field(alias="totalHours")
    grouped_data: list[GroupNode] | None = Field(default=None, alias="groupedData")
    pagination: Pagination
    filters: FilterState
    grouping: GroupingConfig
    last_synced_at: str | None = Field(default=None, alias="lastSyncedAt")


class ProjectsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    projects: list[Project]
    total_projects: int = Field(alias="totalProjects")
    last_synced_at: str | None = Field(default=None, alias="lastSyncedAt")


class UsersResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    users: list[User]
    total_users: int = Field(alias="totalUsers")


class RefreshDataResponse(BaseModel):
    """Outcome of a worklog sync run."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    synced_projects: list[str] = Field(alias="syncedProjects")
    new_entries: int = Field(alias="newEntries")
    updated_entries: int = Field(alias="updatedEntries")
    total_entries: int = Field(alias="totalEntries")
    sync_started_at: str = Field(alias="syncStartedAt")
    sync_completed_at: str = Field(alias="syncCompletedAt")
    errors: list[str] | None = None


class ExportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    download_url: str = Field(alias="downloadUrl")
    file_name: str = Field(alias="fileName")
    file_size: int = Field(alias="fileSize")
    expires_at: str = Field(alias="expiresAt")


class SummaryDateRange(BaseModel):
    start: str
    end: str


class ProjectBreakdown(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId")
    project_name: str = Field(alias="projectName")
    hours: float
    entries: int


class UserBreakdown(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    user_name: str = Field(alias="userName")
    hours: float
    entries: int


class DailyBreakdown(BaseModel):
    date: str
    hours: float
    entries: int


class SummaryResponse(BaseModel):
    """Totals for the filtered entries, broken down by project, user and day."""

    model_config = ConfigDict(populate_by_name=True)

    total_hours: float = Field(alias="totalHours")
    total_entries: int = Field(alias="totalEntries")
    date_range: SummaryDateRange = Field(alias="dateRange")
    project_breakdown: list[ProjectBreakdown] = Field(alias="projectBreakdown")
    user_breakdown: list[UserBreakdown] = Field(alias="userBreakdown")
    daily_breakdown: list[DailyBreakdown] = Field(alias="dailyBreakdown")


class ErrorResponse(BaseModel):
    """Error body returned for any failed request."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    message: str
    status_code: int = Field(alias="statusCode")
    timestamp: str
    path: str | None = None
    details: dict[str, Any] | None = None


# Shared


class PaginationParams(BaseModel):
    page: int | None = Field(default=None, gt=0)
    limit: int | None = Field(default=None, gt=0, le=MAX_PAGE_LIMIT)


class PaginationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")
    total_items: int = Field(alias="totalItems")
    has_next_page: bool = Field(alias="hasNextPage")
    has_previous_page: bool = Field(alias="hasPreviousPage")


class AppFeatures(BaseModel):
    """Feature switches."""

    model_config = ConfigDict(populate_by_name=True)

    enable_export: bool = Field(default=True, alias="enableExport")
    enable_grouping: bool = Field(default=True, alias="enableGrouping")
    enable_filtering: bool = Field(default=True, alias="enableFiltering")
    enable_real_time_sync: bool = Field(default=False, alias="enableRealTimeSync")


class AppConfig(BaseModel):
    """Application settings loaded from ``config.yaml``."""

    model_config = ConfigDict(populate_by_name=True)

    api_base_url: str = Field(default="http://localhost:3000", alias="apiBaseUrl")
    jira_base_url: UrlStr | None = Field(default=None, alias="jiraBaseUrl")
    enable_mock_data: bool = Field(default=False, alias="enableMockData")
    default_page_size: int = Field(default=50, gt=0, le=MAX_PAGE_LIMIT, alias="defaultPageSize")
    max_export_rows: int = Field(default=10000, gt=0, alias="maxExportRows")
    sync_interval_minutes: int = Field(default=30, gt=0, alias="syncIntervalMinutes")
    session_timeout_minutes: int = Field(default=60, gt=0, alias="sessionTimeoutMinutes")
    features: AppFeatures = Field(default_factory=AppFeatures)


def is_authentication_request(obj: Any) -> bool:
    return safe_validate(AuthenticationRequest, obj).success


def is_refresh_data_request(obj: Any) -> bool:
    return safe_validate(RefreshDataRequest, obj).success


def is_timesheets_request(obj: Any) -> bool:
    return safe_validate(TimesheetsRequest, obj).success


def is_project_config_request(obj: Any) -> bool:
    return safe_validate(ProjectConfigRequest, obj).success


def is_export_request(obj: Any) -> bool:
    return safe_validate(ExportRequest, obj).success


__all__ = [
    "API_ENDPOINTS",
    "HTTP_STATUS",
    "AppConfig",
    "AppFeatures",
    "AuthenticationRequest",
    "AuthenticationResponse",
    "DailyBreakdown",
    "ErrorResponse",
    "ExportRequest",
    "ExportResponse",
    "FieldError",
    "LoadingState",
    "Pagination",
    "PaginationParams",
    "PaginationResponse",
    "ProjectBreakdown",
    "ProjectConfigRequest",
    "ProjectsResponse",
    "RefreshDataRequest",
    "RefreshDataResponse",
    "SummaryResponse",
    "TimesheetsRequest",
    "TimesheetsResponse",
    "UserBreakdown",
    "UsersResponse",
    "is_authentication_request",
    "is_export_request",
    "is_project_config_request",
    "is_refresh_data_request",
    "is_timesheets_request",
]
