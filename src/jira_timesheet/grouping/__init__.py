"""Grouping configuration and the group tree builder."""

from jira_timesheet.grouping.builder import (
    GroupingResult,
    GroupTreeBuilder,
    build_group_tree,
    collapse_empty_groups,
    iter_nodes,
)
from jira_timesheet.grouping.models import (
    GroupingConfig,
    GroupingLevel,
    GroupMetadata,
    GroupNode,
    create_default_grouping_config,
)

__all__ = [
    "GroupingConfig",
    "GroupingLevel",
    "GroupingResult",
    "GroupMetadata",
    "GroupNode",
    "GroupTreeBuilder",
    "build_group_tree",
    "collapse_empty_groups",
    "create_default_grouping_config",
    "iter_nodes",
]
