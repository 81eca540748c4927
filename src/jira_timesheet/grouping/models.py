"""Grouping configuration and the grouped tree it produces."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jira_timesheet.utils.validation import safe_validate

GroupingDimension = Literal["project", "user", "issueType", "status", "date", "issue"]

DateGroupingType = Literal["day", "week", "month", "quarter", "year"]

SortOrder = Literal["asc", "desc"]

SortBy = Literal["name", "hours", "count", "date"]

GROUPING_DIMENSION_LABELS: dict[str, str] = {
    "project": "Project",
    "user": "User",
    "issueType": "Issue Type",
    "status": "Status",
    "date": "Date",
    "issue": "Issue",
}

DATE_GROUPING_TYPE_LABELS: dict[str, str] = {
    "day": "Daily",
    "week": "Weekly",
    "month": "Monthly",
    "quarter": "Quarterly",
    "year": "Yearly",
}


class GroupingLevel(BaseModel):
    """One level of the grouping hierarchy, outermost first."""

    model_config = ConfigDict(populate_by_name=True)

    dimension: GroupingDimension
    sort_by: SortBy = Field(alias="sortBy")
    sort_order: SortOrder = Field(alias="sortOrder")
    date_grouping_type: DateGroupingType | None = Field(default=None, alias="dateGroupingType")
    expanded: bool = True

    @model_validator(mode="after")
    def _check_date_grouping_type(self) -> "GroupingLevel":
        if self.dimension == "date" and self.date_grouping_type is None:
            raise ValueError("dateGroupingType is required when dimension is 'date'")
        if self.dimension != "date" and self.date_grouping_type is not None:
            raise ValueError(
                f"dateGroupingType is only allowed when dimension is 'date', got '{self.dimension}'"
            )
        return self


class GroupingConfig(BaseModel):
    """Ordered grouping levels plus display switches."""

    model_config = ConfigDict(populate_by_name=True)

    levels: list[GroupingLevel]
    show_subtotals: bool = Field(alias="showSubtotals")
    show_grand_total: bool = Field(alias="showGrandTotal")
    collapse_empty_groups: bool = Field(alias="collapseEmptyGroups")


class DateRange(BaseModel):
    """Inclusive ISO date bounds of a date bucket."""

    start: str
    end: str


class GroupMetadata(BaseModel):
    """Dimension-specific identifiers for rendering and linking."""

    model_config = ConfigDict(populate_by_name=True)

    project_key: str | None = Field(default=None, alias="projectKey")
    user_id: str | None = Field(default=None, alias="userId")
    issue_type_id: str | None = Field(default=None, alias="issueTypeId")
    status_id: str | None = Field(default=None, alias="statusId")
    date_range: DateRange | None = Field(default=None, alias="dateRange")
    issue_id: str | None = Field(default=None, alias="issueId")


class GroupNode(BaseModel):
    """A node of the grouped forest.

    ``total_hours`` and ``entry_count`` cover the whole subtree, while
    ``entries`` only lists the ids of entries whose grouping path ends here.
    ``dimension`` is None only for the synthetic root of ungrouped output.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    dimension: GroupingDimension | None = None
    value: str
    display_name: str = Field(alias="displayName")
    level: int
    total_hours: float = Field(alias="totalHours")
    entry_count: int = Field(alias="entryCount")
    children: list["GroupNode"] = Field(default_factory=list)
    entries: list[str] = Field(default_factory=list)
    is_expanded: bool = Field(alias="isExpanded")
    metadata: GroupMetadata | None = None


def create_default_grouping_config() -> GroupingConfig:
    """Group by project name, ascending, with totals and empty-group collapsing."""
    return GroupingConfig(
        levels=[
            GroupingLevel(dimension="project", sort_by="name", sort_order="asc", expanded=True),
        ],
        show_subtotals=True,
        show_grand_total=True,
        collapse_empty_groups=True,
    )


def get_grouping_dimension_label(dimension: GroupingDimension) -> str:
    return GROUPING_DIMENSION_LABELS[dimension]


def get_date_grouping_type_label(grouping_type: DateGroupingType) -> str:
    return DATE_GROUPING_TYPE_LABELS[grouping_type]


def is_grouping_config(obj: Any) -> bool:
    return safe_validate(GroupingConfig, obj).success


def is_group_node(obj: Any) -> bool:
    return safe_validate(GroupNode, obj).success
