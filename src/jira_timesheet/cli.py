"""Command-line interface for jira-timesheet."""

import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from jira_timesheet import __version__, validators
from jira_timesheet.api import TimesheetService, TimesheetsRequest, TimesheetsResponse
from jira_timesheet.api.models import MAX_PAGE_LIMIT
from jira_timesheet.config import Config
from jira_timesheet.grouping.models import (
    GroupingConfig,
    GroupNode,
    get_date_grouping_type_label,
    get_grouping_dimension_label,
)
from jira_timesheet.jira.models import format_hours_as_jira_time, parse_jira_time_spent
from jira_timesheet.timesheet.models import TimesheetEntry
from jira_timesheet.utils import ValidationError, get_logger, setup_logging

app = typer.Typer(help="Filter, group and summarize Jira worklogs")
console = Console()
logger = get_logger(__name__)

VALIDATORS = {
    "filters": validators.validate_filter_state,
    "grouping": validators.validate_grouping_config,
    "entry": validators.validate_timesheet_entry,
    "entries": validators.validate_timesheet_entries,
    "user": validators.validate_user,
    "users": validators.validate_users,
    "project": validators.validate_project,
    "projects": validators.validate_projects,
    "issue": validators.validate_issue,
}


def _load_json(path: Path) -> Any:
    try:
        with open(path) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read {path}: {e}[/red]")
        raise typer.Exit(code=1)


def _print_validation_error(error: ValidationError) -> None:
    console.print(f"[red]{escape(str(error).split(':', 1)[0])}[/red]")
    table = Table(title="Validation Errors")
    table.add_column("Field", style="cyan")
    table.add_column("Problem", style="red")
    for field_error in error.errors:
        table.add_row(field_error.field or "-", escape(field_error.message))
    console.print(table)


def _build_grouping(
    group_by: list[str],
    date_grouping: str,
    sort_by: str,
    order: str,
) -> GroupingConfig:
    levels = []
    for dimension in group_by:
        level: dict[str, Any] = {"dimension": dimension, "sortBy": sort_by, "sortOrder": order}
        if dimension == "date":
            level["dateGroupingType"] = date_grouping
        levels.append(level)
    return validators.validate_grouping_config(
        {
            "levels": levels,
            "showSubtotals": True,
            "showGrandTotal": True,
            "collapseEmptyGroups": True,
        }
    )


def _build_filters(
    entries: list[TimesheetEntry],
    from_date: Optional[str],
    to_date: Optional[str],
    projects: list[str],
    users: list[str],
    search: Optional[str],
    include_inactive: bool,
) -> dict[str, Any]:
    work_dates = sorted(entry.started_date.isoformat() for entry in entries)
    fallback = work_dates or [date.today().isoformat()]
    return {
        "dateRange": {
            "startDate": from_date or fallback[0],
            "endDate": to_date or fallback[-1],
            "type": "custom",
        },
        "projects": {"selectedProjectIds": projects, "includeInactive": True},
        "users": {"selectedUserIds": users, "includeInactive": include_inactive},
        "issueTypes": {"selectedIssueTypeIds": []},
        "statuses": {"selectedStatusIds": [], "includeResolved": True},
        "textSearch": {
            "searchText": search or "",
            "searchInDescription": True,
            "searchInIssueSummary": True,
            "searchInIssueKey": True,
            "caseSensitive": False,
        },
    }


def _add_node(
    parent: Tree,
    node: GroupNode,
    show_subtotals: bool,
    entries_by_id: dict[str, TimesheetEntry] | None,
) -> None:
    label = f"[cyan]{escape(node.display_name)}[/cyan]"
    if show_subtotals:
        label += (
            f"  [magenta]{format_hours_as_jira_time(node.total_hours)}[/magenta]"
            f" [dim]({node.entry_count} entries)[/dim]"
        )
    branch = parent.add(label, expanded=node.is_expanded)

    for child in node.children:
        _add_node(branch, child, show_subtotals, entries_by_id)

    if entries_by_id is not None:
        for entry_id in node.entries:
            entry = entries_by_id[entry_id]
            description = escape(entry.description or "")
            branch.add(
                f"{entry.issue.key}  {entry.started_date}  "
                f"{format_hours_as_jira_time(entry.time_spent_hours)}  [dim]{description}[/dim]"
            )


def render_report(
    response: TimesheetsResponse,
    entries_by_id: dict[str, TimesheetEntry] | None = None,
) -> Tree:
    """Render the grouped forest of a response as a rich tree."""
    grouping = response.grouping
    dimensions = [get_grouping_dimension_label(level.dimension) for level in grouping.levels]
    tree = Tree(f"[bold]Timesheet[/bold] by {' / '.join(dimensions) or 'entry'}")

    for node in response.grouped_data or []:
        _add_node(tree, node, grouping.show_subtotals, entries_by_id)

    if grouping.show_grand_total:
        tree.add(
            f"[bold green]Total: {format_hours_as_jira_time(response.total_hours)}"
            f" ({response.total_entries} entries)[/bold green]"
        )
    return tree


@app.command()
def report(
    entries_file: Path = typer.Argument(..., help="JSON file with a list of timesheet entries."),
    group_by: Optional[list[str]] = typer.Option(
        None,
        "--group-by",
        "-g",
        help="Grouping dimension, outermost first (project, user, issueType, status, date, issue).",
    ),
    date_grouping: str = typer.Option(
        "week",
        "--date-grouping",
        help="Bucket size when grouping by date (day, week, month, quarter, year).",
    ),
    sort_by: str = typer.Option("name", "--sort-by", help="Sort groups by name, hours, count or date."),
    order: str = typer.Option("asc", "--order", help="Sort order: asc or desc."),
    from_date: Optional[str] = typer.Option(
        None, "--from-date", help="First work date (YYYY-MM-DD). Defaults to the earliest entry."
    ),
    to_date: Optional[str] = typer.Option(
        None, "--to-date", help="Last work date (YYYY-MM-DD). Defaults to the latest entry."
    ),
    project: Optional[list[str]] = typer.Option(None, "--project", "-p", help="Only these project ids."),
    user: Optional[list[str]] = typer.Option(None, "--user", "-u", help="Only these user ids."),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Text to look for."),
    include_inactive: bool = typer.Option(
        False, "--include-inactive", help="Include worklogs of deactivated users."
    ),
    details: bool = typer.Option(False, "--details", help="List entries under each group."),
    as_json: bool = typer.Option(False, "--json", help="Print the API response as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory. Defaults to ~/.jira-timesheet/",
    ),
) -> None:
    """Filter and group timesheet entries from a JSON file."""
    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        config_dir=config_dir,
        console_level=logging.DEBUG if verbose else logging.WARNING,
    )

    config = Config(config_dir)

    try:
        entries = validators.validate_timesheet_entries(_load_json(entries_file))
        grouping = (
            _build_grouping(group_by, date_grouping, sort_by, order)
            if group_by
            else config.get_grouping_config()
        )
        filters = validators.validate_filter_state(
            _build_filters(
                entries, from_date, to_date, project or [], user or [], search, include_inactive
            )
        )
        service = TimesheetService(config.get_app_config())
        request = TimesheetsRequest(
            filters=filters,
            grouping=grouping,
            page=1,
            limit=min(len(entries), MAX_PAGE_LIMIT) or 1,
        )
        response = service.get_timesheets(entries, request, config.get_last_synced_at())
    except ValidationError as e:
        _print_validation_error(e)
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(response.model_dump_json(by_alias=True, exclude_none=True))
        return

    entries_by_id = {entry.id: entry for entry in entries} if details else None
    console.print(render_report(response, entries_by_id))


@app.command()
def validate(
    kind: str = typer.Argument(..., help=f"Schema to check: {', '.join(VALIDATORS)}."),
    file: Path = typer.Argument(..., help="JSON document to validate."),
) -> None:
    """Validate a JSON document against one of the timesheet schemas."""
    validator = VALIDATORS.get(kind)
    if validator is None:
        console.print(f"[red]Unknown schema '{kind}'. Choose from: {', '.join(VALIDATORS)}[/red]")
        raise typer.Exit(code=2)

    try:
        validator(_load_json(file))
    except ValidationError as e:
        _print_validation_error(e)
        raise typer.Exit(code=1)

    console.print(f"[green]✓ {file} is a valid {kind} document[/green]")


@app.command()
def grouping(
    save: Optional[Path] = typer.Option(
        None, "--save", help="JSON grouping configuration to store as the default."
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory. Defaults to ~/.jira-timesheet/",
    ),
) -> None:
    """Show or replace the default grouping configuration."""
    setup_logging(config_dir=config_dir)
    config = Config(config_dir)

    if save is not None:
        try:
            config.save_grouping_config(validators.validate_grouping_config(_load_json(save)))
        except ValidationError as e:
            _print_validation_error(e)
            raise typer.Exit(code=1)
        console.print("[green]✓ Default grouping saved[/green]")

    try:
        current = config.get_grouping_config()
    except ValidationError as e:
        _print_validation_error(e)
        raise typer.Exit(code=1)

    table = Table(title="Default Grouping")
    table.add_column("Level", style="cyan")
    table.add_column("Dimension", style="magenta")
    table.add_column("Sort", style="green")
    table.add_column("Expanded", style="yellow")
    for idx, level in enumerate(current.levels):
        dimension = get_grouping_dimension_label(level.dimension)
        if level.date_grouping_type:
            dimension += f" ({get_date_grouping_type_label(level.date_grouping_type)})"
        table.add_row(
            str(idx),
            dimension,
            f"{level.sort_by} {level.sort_order}",
            "yes" if level.expanded else "no",
        )
    console.print(table)

    switches = {
        "Subtotals": current.show_subtotals,
        "Grand total": current.show_grand_total,
        "Collapse empty groups": current.collapse_empty_groups,
    }
    for name, enabled in switches.items():
        console.print(f"  {name}: {'[green]on[/green]' if enabled else '[yellow]off[/yellow]'}")


@app.command("time")
def convert_time(
    value: str = typer.Argument(..., help="Jira time string ('1d 2h 30m') or decimal hours ('2.5')."),
) -> None:
    """Convert between Jira time strings and decimal hours."""
    try:
        hours = float(value)
    except ValueError:
        console.print(f"{parse_jira_time_spent(value):.2f}h")
        return

    try:
        console.print(format_hours_as_jira_time(hours))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Jira Timesheet v{__version__}")


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
