"""Configuration management for jira-timesheet."""

import logging
from pathlib import Path
from typing import Any

from jira_timesheet.api.models import AppConfig, ProjectConfigRequest
from jira_timesheet.grouping.models import GroupingConfig, create_default_grouping_config
from jira_timesheet.utils.storage import StorageManager
from jira_timesheet.utils.validation import validate_data
from jira_timesheet.validators import validate_grouping_config

logger = logging.getLogger(__name__)


class Config:
    """Manages application settings, the default grouping and the project selection."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize configuration.

        Args:
            config_dir: Directory for storing configuration.
        """
        self.storage = StorageManager(config_dir)
        self._data: dict[str, Any] = self.storage.load_config()

    def _save(self) -> None:
        self.storage.save_config(self._data)

    def get_app_config(self) -> AppConfig:
        """Get application settings, falling back to defaults for missing keys.

        Raises:
            ValidationError: If ``config.yaml`` holds invalid settings.
        """
        return validate_data(AppConfig, self._data.get("app", {}), "Invalid app configuration")

    def update_app_config(self, app_config: AppConfig) -> None:
        self._data["app"] = app_config.model_dump(by_alias=True, exclude_none=True)
        self._save()

    def get_grouping_config(self) -> GroupingConfig:
        """Get the saved default grouping, or the built-in default if none is saved."""
        data = self._data.get("grouping")
        if data is None:
            return create_default_grouping_config()
        return validate_grouping_config(data)

    def save_grouping_config(self, grouping: GroupingConfig) -> None:
        """Persist a grouping as the default for new reports.

        Args:
            grouping: Grouping configuration to save.
        """
        self._data["grouping"] = grouping.model_dump(by_alias=True, exclude_none=True)
        self._save()
        logger.info(f"Saved default grouping with {len(grouping.levels)} levels")

    def get_selected_project_ids(self) -> list[str]:
        return list(self._data.get("projects", {}).get("selected", []))

    def update_selected_projects(self, request: ProjectConfigRequest) -> None:
        """Replace the selected project ids.

        Args:
            request: Validated project configuration request.
        """
        # dict.fromkeys drops duplicates and keeps order
        selected = list(dict.fromkeys(request.selected_project_ids))
        self._data.setdefault("projects", {})["selected"] = selected
        self._save()
        logger.info(f"Selected {len(selected)} projects")

    def is_project_selected(self, project_id: str) -> bool:
        return project_id in self.get_selected_project_ids()

    def get_last_synced_at(self) -> str | None:
        """Get the last sync timestamp as an ISO string."""
        last_sync = self.storage.get_last_sync_date()
        return last_sync.isoformat() if last_sync else None
