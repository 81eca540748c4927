"""CLI tests for the report, validate, grouping and time commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import make_entry_data, make_user_data
from jira_timesheet import __version__
from jira_timesheet.cli import app

runner = CliRunner()


def _output(result) -> str:
    """Collapse rich's line wrapping so assertions can match phrases."""
    return " ".join(result.stdout.split())


@pytest.fixture
def entries_file(tmp_path: Path) -> Path:
    bob = make_user_data("user_2", "Bob Smith")
    entries = [
        make_entry_data("w1", hours=1.0, started="2024-01-15", project=("200", "BBB", "Beta")),
        make_entry_data("w2", hours=2.0, started="2024-01-16"),
        make_entry_data("w3", hours=3.0, started="2024-02-03", author=bob),
        make_entry_data(
            "w4",
            hours=0.5,
            started="2024-02-05",
            author=bob,
            project=("200", "BBB", "Beta"),
            issue_id="10002",
            key="BBB-7",
            summary="Fix export",
        ),
    ]
    path = tmp_path / "entries.json"
    path.write_text(json.dumps(entries))
    return path


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    path = tmp_path / "config"
    path.mkdir()
    return path


class TestReportCommand:
    """Test the 'jira-timesheet report' command."""

    def test_default_grouping(self, entries_file: Path, config_dir: Path) -> None:
        """Should group by project and print the grand total."""
        result = runner.invoke(app, ["report", str(entries_file), "--config-dir", str(config_dir)])

        assert result.exit_code == 0
        output = _output(result)
        assert output.index("Alpha") < output.index("Beta")
        assert "5h (2 entries)" in output
        assert "Total: 6h 30m (4 entries)" in output

    def test_group_by_user_with_details(self, entries_file: Path, config_dir: Path) -> None:
        """Should nest entries under their group."""
        result = runner.invoke(
            app,
            [
                "report",
                str(entries_file),
                "-g",
                "user",
                "--sort-by",
                "hours",
                "--order",
                "desc",
                "--details",
                "--config-dir",
                str(config_dir),
            ],
        )

        assert result.exit_code == 0
        output = _output(result)
        assert output.index("Bob Smith") < output.index("Jane Doe")
        assert "BBB-7" in output

    def test_date_filter(self, entries_file: Path, config_dir: Path) -> None:
        result = runner.invoke(
            app,
            [
                "report",
                str(entries_file),
                "--from-date",
                "2024-02-01",
                "--config-dir",
                str(config_dir),
            ],
        )

        assert result.exit_code == 0
        assert "Total: 3h 30m (2 entries)" in _output(result)

    def test_json_output(self, entries_file: Path, config_dir: Path) -> None:
        result = runner.invoke(
            app,
            ["report", str(entries_file), "-g", "date", "--json", "--config-dir", str(config_dir)],
        )

        assert result.exit_code == 0
        output = _output(result)
        assert '"totalEntries": 4' in output
        assert '"value": "2024-W03"' in output

    def test_invalid_option_is_reported(self, entries_file: Path, config_dir: Path) -> None:
        result = runner.invoke(
            app,
            ["report", str(entries_file), "-g", "team", "--config-dir", str(config_dir)],
        )

        assert result.exit_code == 1
        assert "Invalid grouping configuration" in _output(result)

    def test_invalid_entries_file(self, tmp_path: Path, config_dir: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"id": "w1"}))

        result = runner.invoke(app, ["report", str(path), "--config-dir", str(config_dir)])

        assert result.exit_code == 1
        assert "Invalid timesheet entries array" in _output(result)

    def test_malformed_started_is_rejected(self, tmp_path: Path, config_dir: Path) -> None:
        entry = make_entry_data("w1")
        entry["started"] = "not-a-date"
        path = tmp_path / "entries.json"
        path.write_text(json.dumps([entry]))

        result = runner.invoke(
            app, ["report", str(path), "-g", "date", "--config-dir", str(config_dir)]
        )

        assert result.exit_code == 1
        output = _output(result)
        assert "Invalid timesheet entries array" in output
        assert "0.started" in output

    def test_missing_entries_file(self, tmp_path: Path, config_dir: Path) -> None:
        result = runner.invoke(
            app, ["report", str(tmp_path / "missing.json"), "--config-dir", str(config_dir)]
        )

        assert result.exit_code == 1
        assert "Could not read" in _output(result)


class TestValidateCommand:
    """Test the 'jira-timesheet validate' command."""

    def test_valid_document(self, entries_file: Path) -> None:
        result = runner.invoke(app, ["validate", "entries", str(entries_file)])

        assert result.exit_code == 0
        assert "is a valid entries document" in _output(result)

    def test_invalid_document(self, tmp_path: Path) -> None:
        path = tmp_path / "user.json"
        path.write_text(json.dumps({"id": "u1", "email": "nope"}))

        result = runner.invoke(app, ["validate", "user", str(path)])

        assert result.exit_code == 1
        output = _output(result)
        assert "Invalid user data" in output
        assert "displayName" in output

    def test_unknown_schema(self, entries_file: Path) -> None:
        result = runner.invoke(app, ["validate", "invoice", str(entries_file)])

        assert result.exit_code == 2
        assert "Unknown schema 'invoice'" in _output(result)


class TestGroupingCommand:
    """Test the 'jira-timesheet grouping' command."""

    def test_show_default(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["grouping", "--config-dir", str(config_dir)])

        assert result.exit_code == 0
        output = _output(result)
        assert "Project" in output
        assert "Collapse empty groups: on" in output

    def test_save(self, tmp_path: Path, config_dir: Path) -> None:
        path = tmp_path / "grouping.json"
        path.write_text(
            json.dumps(
                {
                    "levels": [
                        {
                            "dimension": "date",
                            "sortBy": "date",
                            "sortOrder": "desc",
                            "dateGroupingType": "month",
                        }
                    ],
                    "showSubtotals": True,
                    "showGrandTotal": False,
                    "collapseEmptyGroups": True,
                }
            )
        )

        result = runner.invoke(
            app, ["grouping", "--save", str(path), "--config-dir", str(config_dir)]
        )

        assert result.exit_code == 0
        output = _output(result)
        assert "Default grouping saved" in output
        assert "Date (Monthly)" in output
        assert "Grand total: off" in output
        assert "INFO" not in output
        assert "Saved default grouping" in (config_dir / "jira-timesheet.log").read_text()


class TestTimeCommand:
    """Test the 'jira-timesheet time' command."""

    def test_hours_to_jira(self) -> None:
        result = runner.invoke(app, ["time", "2.5"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "2h 30m"

    def test_jira_to_hours(self) -> None:
        result = runner.invoke(app, ["time", "1d 2h"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "10.00h"

    def test_negative_hours(self) -> None:
        result = runner.invoke(app, ["time", "--", "-1"])

        assert result.exit_code == 1
        assert "negative" in _output(result)


class TestVersionCommand:
    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"Jira Timesheet v{__version__}" in result.stdout
