"""Storage for jira-timesheet configuration and sync state."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_DIR = Path.home() / ".jira-timesheet"


class StorageManager:
    """Manages config.yaml and state.json persistence."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize storage manager.

        Args:
            config_dir: Directory to store configuration. Defaults to ~/.jira-timesheet/
        """
        self.config_dir = config_dir or DEFAULT_CONFIG_DIR
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_file = self.config_dir / "config.yaml"
        self.state_file = self.config_dir / "state.json"

    def load_config(self) -> dict[str, Any]:
        """Load application config (page sizes, feature flags, default grouping)."""
        if self.config_file.exists():
            with open(self.config_file) as f:
                return yaml.safe_load(f) or {}
        return {}

    def save_config(self, config: dict[str, Any]) -> None:
        """Save application config."""
        with open(self.config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)

    def load_state(self) -> dict[str, Any]:
        """Load the state written by the worklog sync process.

        Returns:
            State dictionary with last sync timestamp, etc.
        """
        if self.state_file.exists():
            with open(self.state_file) as f:
                return json.load(f)
        return {}

    def get_last_sync_date(self) -> datetime | None:
        """Get the date of the last successful worklog sync.

        Returns:
            Last sync datetime or None if never synced.
        """
        state = self.load_state()
        if "last_sync_date" in state:
            return datetime.fromisoformat(state["last_sync_date"])
        return None
