"""API request/response envelopes and the service that fills them."""

from jira_timesheet.api.models import (
    API_ENDPOINTS,
    HTTP_STATUS,
    AppConfig,
    ErrorResponse,
    SummaryResponse,
    TimesheetsRequest,
    TimesheetsResponse,
)
from jira_timesheet.api.service import TimesheetService, build_error_response

__all__ = [
    "API_ENDPOINTS",
    "HTTP_STATUS",
    "AppConfig",
    "ErrorResponse",
    "SummaryResponse",
    "TimesheetService",
    "TimesheetsRequest",
    "TimesheetsResponse",
    "build_error_response",
]
