"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path
from typing import Any, Callable

import pytest

from jira_timesheet.config import Config
from jira_timesheet.grouping.models import GroupingConfig, GroupingLevel
from jira_timesheet.timesheet.models import TimesheetEntry
from jira_timesheet.utils import StorageManager


def make_user_data(user_id: str = "user_1", name: str = "Jane Doe", active: bool = True) -> dict[str, Any]:
    """Raw (camelCase) user payload."""
    return {
        "id": user_id,
        "email": f"{user_id}@example.com",
        "displayName": name,
        "accountId": user_id,
        "active": active,
    }


def make_issue_data(
    issue_id: str = "10001",
    key: str = "ABC-1",
    summary: str = "Build the report",
    project_id: str = "100",
    project_key: str = "ABC",
    project_name: str = "Alpha",
    issue_type: tuple[str, str] = ("1", "Task"),
    status: tuple[str, str] = ("10", "In Progress"),
    status_category: tuple[str, str] = ("4", "In Progress"),
) -> dict[str, Any]:
    """Raw (camelCase) issue payload."""
    return {
        "id": issue_id,
        "key": key,
        "summary": summary,
        "issueType": {"id": issue_type[0], "name": issue_type[1]},
        "status": {
            "id": status[0],
            "name": status[1],
            "statusCategory": {
                "id": status_category[0],
                "name": status_category[1],
                "colorName": "yellow",
            },
        },
        "project": {"id": project_id, "key": project_key, "name": project_name},
        "created": "2024-01-01T09:00:00.000+0000",
        "updated": "2024-01-02T09:00:00.000+0000",
    }


def make_entry_data(
    entry_id: str = "w1",
    hours: float = 1.0,
    started: str = "2024-01-15",
    project: tuple[str, str, str] = ("100", "ABC", "Alpha"),
    author: dict[str, Any] | None = None,
    no_author: bool = False,
    description: str | None = None,
    **issue_overrides: Any,
) -> dict[str, Any]:
    """Raw (camelCase) timesheet entry payload."""
    project_id, project_key, project_name = project
    issue = make_issue_data(
        project_id=project_id,
        project_key=project_key,
        project_name=project_name,
        **issue_overrides,
    )
    seconds = round(hours * 3600)
    data: dict[str, Any] = {
        "id": entry_id,
        "issueId": issue["id"],
        "issue": issue,
        "timeSpentSeconds": seconds,
        "timeSpentHours": seconds / 3600,
        "started": f"{started}T09:00:00.000+0000",
        "created": f"{started}T18:00:00.000+0000",
        "updated": f"{started}T18:00:00.000+0000",
        "project": {"id": project_id, "key": project_key, "name": project_name},
        "worklogId": entry_id,
    }
    if not no_author:
        data["author"] = author or make_user_data()
    if description is not None:
        data["description"] = description
    return data


def make_entry(**kwargs: Any) -> TimesheetEntry:
    """Validated timesheet entry built from ``make_entry_data``."""
    return TimesheetEntry.model_validate(make_entry_data(**kwargs))


def make_grouping(*levels: GroupingLevel, collapse: bool = False) -> GroupingConfig:
    return GroupingConfig(
        levels=list(levels),
        show_subtotals=True,
        show_grand_total=True,
        collapse_empty_groups=collapse,
    )


@pytest.fixture
def temp_config_dir() -> Path:
    """Create a temporary configuration directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage_manager(temp_config_dir: Path) -> StorageManager:
    """Create a storage manager with temporary directory."""
    return StorageManager(temp_config_dir)


@pytest.fixture
def config(temp_config_dir: Path) -> Config:
    """Create a config instance with temporary directory."""
    return Config(temp_config_dir)


@pytest.fixture
def entry_factory() -> Callable[..., TimesheetEntry]:
    """Factory for validated timesheet entries."""
    return make_entry


@pytest.fixture
def sample_entries() -> list[TimesheetEntry]:
    """Entries across two projects, two users and two months."""
    bob = make_user_data("user_2", "Bob Smith")
    return [
        make_entry(
            entry_id="w1",
            hours=1.0,
            started="2024-01-15",
            project=("200", "BBB", "Beta"),
            issue_id="10003",
            key="BBB-1",
        ),
        make_entry(entry_id="w2", hours=2.0, started="2024-01-16"),
        make_entry(entry_id="w3", hours=3.0, started="2024-02-03", author=bob),
        make_entry(
            entry_id="w4",
            hours=0.5,
            started="2024-02-05",
            author=bob,
            project=("200", "BBB", "Beta"),
            issue_id="10002",
            key="BBB-7",
            summary="Fix export",
            issue_type=("2", "Bug"),
            status=("20", "Done"),
            status_category=("3", "Done"),
        ),
    ]
