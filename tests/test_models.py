"""Tests for Pydantic models."""

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from conftest import make_entry, make_entry_data, make_issue_data, make_user_data
from jira_timesheet.timesheet import (
    Issue,
    Project,
    StatusCategory,
    TimesheetEntry,
    User,
    is_issue,
    is_project,
    is_timesheet_entry,
    is_user,
)


class TestUserModel:
    """Test the user model."""

    def test_user_creation_from_aliases(self) -> None:
        """Test creating a user from camelCase data."""
        user = User.model_validate(make_user_data())

        assert user.id == "user_1"
        assert user.display_name == "Jane Doe"
        assert user.account_id == "user_1"
        assert user.active is True
        assert user.avatar_url is None

    def test_user_rejects_bad_email(self) -> None:
        """Test that a malformed email is rejected."""
        data = make_user_data()
        data["email"] = "not-an-email"

        with pytest.raises(PydanticValidationError):
            User.model_validate(data)

    def test_user_rejects_bad_avatar_url(self) -> None:
        """Test that a malformed avatar URL is rejected."""
        data = make_user_data()
        data["avatarUrl"] = "not a url"

        assert is_user(data) is False


class TestProjectModel:
    """Test the project model."""

    def test_project_creation(self) -> None:
        """Test creating a project with avatars."""
        project = Project.model_validate(
            {
                "id": "100",
                "key": "ABC",
                "name": "Alpha",
                "projectTypeKey": "software",
                "isSelected": True,
                "avatarUrls": {"48x48": "https://example.com/a48.png"},
            }
        )

        assert project.key == "ABC"
        assert project.is_selected is True
        assert project.avatar_urls.size_48 == "https://example.com/a48.png"
        assert project.avatar_urls.size_16 is None

    def test_project_requires_selection_flag(self) -> None:
        """Test that isSelected is required."""
        assert is_project({"id": "1", "key": "A", "name": "A", "projectTypeKey": "software"}) is False


class TestIssueModel:
    """Test the issue model."""

    def test_issue_creation(self) -> None:
        issue = Issue.model_validate(make_issue_data())

        assert issue.key == "ABC-1"
        assert issue.issue_type.name == "Task"
        assert issue.status.status_category.color_name == "yellow"
        assert issue.project.key == "ABC"
        assert issue.assignee is None

    def test_issue_guard(self) -> None:
        data = make_issue_data()
        assert is_issue(data) is True

        del data["status"]
        assert is_issue(data) is False

    @pytest.mark.parametrize(
        "category_id,name,expected",
        [
            ("3", "Done", True),
            ("99", "done", True),
            ("4", "In Progress", False),
            ("2", "To Do", False),
        ],
    )
    def test_status_category_is_done(self, category_id: str, name: str, expected: bool) -> None:
        """Test detecting the resolved status category."""
        category = StatusCategory(id=category_id, name=name, color_name="green")

        assert category.is_done is expected


class TestTimesheetEntryModel:
    """Test the timesheet entry model."""

    def test_entry_creation(self) -> None:
        """Test creating an entry from camelCase data."""
        entry = make_entry(entry_id="w9", hours=2.5, description="Pairing")

        assert entry.id == "w9"
        assert entry.worklog_id == "w9"
        assert entry.time_spent_seconds == 9000
        assert entry.time_spent_hours == 2.5
        assert entry.description == "Pairing"
        assert entry.author.display_name == "Jane Doe"

    def test_entry_started_date(self) -> None:
        """Test deriving the work date from the start timestamp."""
        entry = make_entry(started="2024-03-09")

        assert entry.started_date == date(2024, 3, 9)

    def test_entry_without_author(self) -> None:
        entry = make_entry(no_author=True)

        assert entry.author is None

    def test_entry_rejects_hours_mismatch(self) -> None:
        """Test that hours must agree with seconds."""
        data = make_entry_data(hours=1.0)
        data["timeSpentHours"] = 1.5

        with pytest.raises(PydanticValidationError, match="does not match"):
            TimesheetEntry.model_validate(data)

    @pytest.mark.parametrize("seconds", [0, -60])
    def test_entry_rejects_non_positive_duration(self, seconds: int) -> None:
        """Test that durations must be positive."""
        data = make_entry_data()
        data["timeSpentSeconds"] = seconds
        data["timeSpentHours"] = seconds / 3600

        assert is_timesheet_entry(data) is False

    def test_entry_is_frozen(self) -> None:
        """Test that entries cannot be modified after creation."""
        entry = make_entry()

        with pytest.raises(PydanticValidationError):
            entry.description = "changed"

    def test_entry_dump_uses_aliases(self) -> None:
        entry = make_entry()

        dumped = entry.model_dump(by_alias=True, exclude_none=True)

        assert dumped["timeSpentSeconds"] == 3600
        assert dumped["issue"]["issueType"]["name"] == "Task"
        assert TimesheetEntry.model_validate(dumped) == entry
