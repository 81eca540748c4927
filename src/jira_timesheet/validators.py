"""Validators for the package's schemas, raising ``ValidationError`` on bad input."""

from functools import lru_cache
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, create_model

from jira_timesheet.filtering import FilterState
from jira_timesheet.grouping.models import GroupingConfig
from jira_timesheet.timesheet.models import Issue, Project, TimesheetEntry, User
from jira_timesheet.utils.validation import validate_data


@lru_cache(maxsize=None)
def partial_model(model: type[BaseModel]) -> type[BaseModel]:
    """Derive a model with every top-level field optional.

    Field constraints are kept; model-level validators are not, since they
    assume a complete object.
    """
    fields: dict[str, Any] = {}
    for name, info in model.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        fields[name] = (Optional[annotation], Field(default=None, alias=info.alias))
    return create_model(
        f"Partial{model.__name__}",
        __config__=ConfigDict(populate_by_name=True),
        **fields,
    )


def validate_filter_state(data: Any) -> FilterState:
    return validate_data(FilterState, data, "Invalid filter state")


def validate_grouping_config(data: Any) -> GroupingConfig:
    return validate_data(GroupingConfig, data, "Invalid grouping configuration")


def validate_timesheet_entry(data: Any) -> TimesheetEntry:
    return validate_data(TimesheetEntry, data, "Invalid timesheet entry")


def validate_user(data: Any) -> User:
    return validate_data(User, data, "Invalid user data")


def validate_project(data: Any) -> Project:
    return validate_data(Project, data, "Invalid project data")


def validate_issue(data: Any) -> Issue:
    return validate_data(Issue, data, "Invalid issue data")


def validate_timesheet_entries(data: Any) -> list[TimesheetEntry]:
    return validate_data(list[TimesheetEntry], data, "Invalid timesheet entries array")


def validate_users(data: Any) -> list[User]:
    return validate_data(list[User], data, "Invalid users array")


def validate_projects(data: Any) -> list[Project]:
    return validate_data(list[Project], data, "Invalid projects array")


def validate_partial_filter_state(data: Any) -> BaseModel:
    """Validate a filter update in which any top-level section may be omitted."""
    return validate_data(partial_model(FilterState), data, "Invalid partial filter state")


def validate_partial_grouping_config(data: Any) -> BaseModel:
    """Validate a grouping update in which any top-level field may be omitted."""
    return validate_data(
        partial_model(GroupingConfig), data, "Invalid partial grouping configuration"
    )


def assert_is_filter_state(data: Any) -> None:
    validate_filter_state(data)


def assert_is_grouping_config(data: Any) -> None:
    validate_grouping_config(data)


def assert_is_timesheet_entry(data: Any) -> None:
    validate_timesheet_entry(data)
