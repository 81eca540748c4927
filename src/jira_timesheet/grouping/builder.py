"""Fold a flat list of timesheet entries into a hierarchical group forest."""

import calendar
import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from jira_timesheet.grouping.models import (
    DateGroupingType,
    DateRange,
    GroupingConfig,
    GroupingLevel,
    GroupMetadata,
    GroupNode,
)
from jira_timesheet.timesheet.models import TimesheetEntry

logger = logging.getLogger(__name__)

MISSING_KEY = "~none"
UNASSIGNED_VALUE = "unassigned"
UNASSIGNED_LABEL = "Unassigned"
ROOT_ID = "root"


@dataclass
class GroupKey:
    """Bucket identity of an entry at one level plus what the node shows."""

    key: str
    value: str
    display_name: str
    metadata: GroupMetadata | None = None
    start: date | None = None


@dataclass
class _Bucket:
    group_key: GroupKey
    entries: list[TimesheetEntry] = field(default_factory=list)

    @property
    def sort_date(self) -> date:
        if self.group_key.start is not None:
            return self.group_key.start
        return min(entry.started_date for entry in self.entries)


@dataclass
class GroupingResult:
    """Grouped forest plus the grand totals and display switches."""

    nodes: list[GroupNode] = field(default_factory=list)
    total_hours: float = 0.0
    total_entries: int = 0
    show_subtotals: bool = True
    show_grand_total: bool = True


def date_bucket_start(day: date, grouping_type: DateGroupingType) -> date:
    """Truncate a date to the first day of its bucket (weeks start Monday)."""
    if grouping_type == "week":
        return day - timedelta(days=day.weekday())
    if grouping_type == "month":
        return day.replace(day=1)
    if grouping_type == "quarter":
        return date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)
    if grouping_type == "year":
        return date(day.year, 1, 1)
    return day


def date_bucket_end(start: date, grouping_type: DateGroupingType) -> date:
    """Last day (inclusive) of the bucket beginning at ``start``."""
    if grouping_type == "week":
        return start + timedelta(days=6)
    if grouping_type == "month":
        return start.replace(day=calendar.monthrange(start.year, start.month)[1])
    if grouping_type == "quarter":
        last_month = start.month + 2
        return date(start.year, last_month, calendar.monthrange(start.year, last_month)[1])
    if grouping_type == "year":
        return date(start.year, 12, 31)
    return start


def _date_labels(start: date, grouping_type: DateGroupingType) -> tuple[str, str]:
    if grouping_type == "week":
        iso_year, iso_week, _ = start.isocalendar()
        return f"{iso_year}-W{iso_week:02d}", f"Week of {start.isoformat()}"
    if grouping_type == "month":
        return f"{start.year}-{start.month:02d}", f"{calendar.month_name[start.month]} {start.year}"
    if grouping_type == "quarter":
        quarter = (start.month - 1) // 3 + 1
        return f"{start.year}-Q{quarter}", f"Q{quarter} {start.year}"
    if grouping_type == "year":
        return str(start.year), str(start.year)
    return start.isoformat(), f"{calendar.day_abbr[start.weekday()]} {start.isoformat()}"


def group_key_for(entry: TimesheetEntry, level: GroupingLevel) -> GroupKey:
    """Derive the bucket an entry falls into at ``level``.

    Entries without an author land in a shared "Unassigned" bucket when
    grouping by user.
    """
    dimension = level.dimension

    if dimension == "project":
        project = entry.project
        return GroupKey(
            key=project.id,
            value=project.key,
            display_name=project.name,
            metadata=GroupMetadata(project_key=project.key),
        )

    if dimension == "user":
        author = entry.author
        if author is None:
            return GroupKey(key=MISSING_KEY, value=UNASSIGNED_VALUE, display_name=UNASSIGNED_LABEL)
        return GroupKey(
            key=author.id,
            value=author.id,
            display_name=author.display_name,
            metadata=GroupMetadata(user_id=author.id),
        )

    if dimension == "issueType":
        issue_type = entry.issue.issue_type
        return GroupKey(
            key=issue_type.id,
            value=issue_type.id,
            display_name=issue_type.name,
            metadata=GroupMetadata(issue_type_id=issue_type.id),
        )

    if dimension == "status":
        status = entry.issue.status
        return GroupKey(
            key=status.id,
            value=status.id,
            display_name=status.name,
            metadata=GroupMetadata(status_id=status.id),
        )

    if dimension == "issue":
        issue = entry.issue
        return GroupKey(
            key=issue.id,
            value=issue.key,
            display_name=f"{issue.key}: {issue.summary}",
            metadata=GroupMetadata(issue_id=issue.id),
        )

    if dimension == "date":
        grouping_type = level.date_grouping_type or "day"
        start = date_bucket_start(entry.started_date, grouping_type)
        end = date_bucket_end(start, grouping_type)
        value, display_name = _date_labels(start, grouping_type)
        return GroupKey(
            key=start.isoformat(),
            value=value,
            display_name=display_name,
            metadata=GroupMetadata(
                date_range=DateRange(start=start.isoformat(), end=end.isoformat())
            ),
            start=start,
        )

    raise ValueError(f"Unknown grouping dimension: {dimension}")


def _primary_sort_key(level: GroupingLevel, node: GroupNode, bucket: _Bucket) -> Any:
    if level.sort_by == "hours":
        return node.total_hours
    if level.sort_by == "count":
        return node.entry_count
    if level.sort_by == "date":
        return bucket.sort_date
    return node.display_name.casefold()


def _natural_sort_key(bucket: _Bucket) -> Any:
    if bucket.group_key.start is not None:
        return bucket.group_key.start
    return bucket.group_key.value


class GroupTreeBuilder:
    """Builds a ``GroupNode`` forest from entries according to a ``GroupingConfig``.

    The builder never mutates its input and allocates a fresh tree per call,
    so one instance can be shared freely.
    """

    def __init__(self, config: GroupingConfig) -> None:
        """Initialize the builder.

        Args:
            config: Validated grouping configuration.
        """
        self.config = config

    def build(self, entries: Iterable[TimesheetEntry]) -> GroupingResult:
        """Group entries into a forest.

        Args:
            entries: Already-filtered timesheet entries, in input order.

        Returns:
            Grouping result with the root nodes and grand totals.
        """
        entries = list(entries)
        levels = self.config.levels

        if levels:
            nodes = self._build_level(entries, 0, parent_id=None)
        else:
            nodes = [self._build_root(entries)]

        if self.config.collapse_empty_groups:
            nodes = collapse_empty_groups(nodes)

        logger.debug(
            f"Grouped {len(entries)} entries into {len(nodes)} root groups "
            f"across {len(levels)} levels"
        )

        return GroupingResult(
            nodes=nodes,
            total_hours=math.fsum(entry.time_spent_hours for entry in entries),
            total_entries=len(entries),
            show_subtotals=self.config.show_subtotals,
            show_grand_total=self.config.show_grand_total,
        )

    def _build_root(self, entries: list[TimesheetEntry]) -> GroupNode:
        return GroupNode(
            id=ROOT_ID,
            dimension=None,
            value="all",
            display_name="All entries",
            level=0,
            total_hours=math.fsum(entry.time_spent_hours for entry in entries),
            entry_count=len(entries),
            entries=[entry.id for entry in entries],
            is_expanded=True,
        )

    def _build_level(
        self,
        entries: list[TimesheetEntry],
        depth: int,
        parent_id: str | None,
    ) -> list[GroupNode]:
        level = self.config.levels[depth]
        is_leaf_level = depth == len(self.config.levels) - 1

        # dict keeps first-seen order of buckets
        buckets: dict[str, _Bucket] = {}
        for entry in entries:
            group_key = group_key_for(entry, level)
            bucket = buckets.get(group_key.key)
            if bucket is None:
                bucket = buckets[group_key.key] = _Bucket(group_key)
            bucket.entries.append(entry)

        pairs: list[tuple[GroupNode, _Bucket]] = []
        for bucket in buckets.values():
            group_key = bucket.group_key
            segment = f"{level.dimension}:{group_key.key}"
            node_id = f"{parent_id}/{segment}" if parent_id else segment

            if is_leaf_level:
                children: list[GroupNode] = []
                direct = bucket.entries
            else:
                children = self._build_level(bucket.entries, depth + 1, node_id)
                direct = []

            total_hours = math.fsum(child.total_hours for child in children) + math.fsum(
                entry.time_spent_hours for entry in direct
            )
            entry_count = sum(child.entry_count for child in children) + len(direct)

            node = GroupNode(
                id=node_id,
                dimension=level.dimension,
                value=group_key.value,
                display_name=group_key.display_name,
                level=depth,
                total_hours=total_hours,
                entry_count=entry_count,
                children=children,
                entries=[entry.id for entry in direct],
                is_expanded=level.expanded,
                metadata=group_key.metadata,
            )
            pairs.append((node, bucket))

        pairs.sort(key=lambda pair: _natural_sort_key(pair[1]))
        pairs.sort(
            key=lambda pair: _primary_sort_key(level, pair[0], pair[1]),
            reverse=level.sort_order == "desc",
        )
        return [node for node, _ in pairs]


def collapse_empty_groups(nodes: list[GroupNode]) -> list[GroupNode]:
    """Drop nodes whose subtree holds no entries, bottom-up.

    The synthetic root of ungrouped output (``dimension`` None) is always kept.
    """
    kept = []
    for node in nodes:
        node.children = collapse_empty_groups(node.children)
        if node.dimension is None or node.entry_count > 0 or node.children or node.entries:
            kept.append(node)
    return kept


def build_group_tree(entries: Iterable[TimesheetEntry], config: GroupingConfig) -> GroupingResult:
    """Group ``entries`` according to ``config``."""
    return GroupTreeBuilder(config).build(entries)


def iter_nodes(nodes: Iterable[GroupNode]) -> Iterator[GroupNode]:
    """Walk a forest depth first, parents before children."""
    for node in nodes:
        yield node
        yield from iter_nodes(node.children)
