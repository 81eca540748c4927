"""Jira timesheet reporting: entities, filters, grouping and API envelopes."""

__version__ = "0.1.0"
