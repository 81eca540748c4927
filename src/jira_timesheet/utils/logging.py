"""Logging configuration for jira-timesheet."""

import logging
from pathlib import Path

CONFIG_DIR_NAME = ".jira-timesheet"


def setup_logging(
    log_level: int = logging.INFO,
    config_dir: Path | None = None,
    console_level: int = logging.WARNING,
) -> None:
    """Configure logging for the CLI.

    The log file under the config directory records everything at
    ``log_level``. The console only shows ``console_level`` and above, so
    reports printed to stdout are not interleaved with progress messages.

    Args:
        log_level: Level for the log file (e.g., logging.INFO, logging.DEBUG).
        config_dir: Directory to store log files. Defaults to ~/.jira-timesheet/
        console_level: Level for messages written to stderr.
    """
    if config_dir is None:
        config_dir = Path.home() / CONFIG_DIR_NAME

    config_dir.mkdir(parents=True, exist_ok=True)
    log_file = config_dir / "jira-timesheet.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(min(log_level, console_level))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(log_level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
