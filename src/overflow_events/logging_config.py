"""
Logging setup for the overflow-events CLI and server.

The CLI prints bare level and message lines to stderr. The server adds
timestamps and the thread name, because the dataset warm-up logs from a
background thread. Each entry point rotates its own log file, configured by
the [logging] config section.
"""

import logging
import logging.config
import os
import sys

from pathlib import Path
from typing import Any, Literal

from overflow_events.config import LoggingSettings, get_logging_settings
from overflow_events.constants import (
    CLI_CONSOLE_FORMAT,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_FILE,
    FILE_LOG_FORMAT,
    SERVER_CONSOLE_FORMAT,
    SERVER_LOG_FILE,
)

LogTarget = Literal["cli", "server"]

# target -> (console format, log file name)
_TARGETS: dict[str, tuple[str, str]] = {
    "cli": (CLI_CONSOLE_FORMAT, DEFAULT_LOG_FILE),
    "server": (SERVER_CONSOLE_FORMAT, SERVER_LOG_FILE),
}

_logging_configured = False


def get_log_dir() -> Path:
    """Get log directory path, creating if needed."""
    log_dir = DEFAULT_LOG_DIR
    os.makedirs(log_dir, mode=0o700, exist_ok=True)
    return log_dir


def get_log_path(target: LogTarget = "cli") -> Path:
    """
    Get path to the log file of an entry point.

    Args:
        target: "cli" or "server"

    Returns:
        Path to overflow_events.log or overflow_events_server.log
    """
    return get_log_dir() / _TARGETS[target][1]


def _build_logging_config(
    settings: LoggingSettings,
    target: LogTarget = "cli",
    verbose: bool = False,
) -> dict[str, Any]:
    """
    Build the dictConfig configuration dictionary.

    Args:
        settings: Validated [logging] settings
        target: Entry point being configured
        verbose: If True, set console to DEBUG level

    Returns:
        Dictionary suitable for logging.config.dictConfig()
    """
    console_format, _ = _TARGETS[target]

    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": console_format},
            "file": {"format": FILE_LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG" if verbose else "INFO",
                "formatter": "console",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": "DEBUG",
            "handlers": ["console"],
        },
    }

    if settings.enabled:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": settings.level,
            "formatter": "file",
            "filename": str(get_log_path(target)),
            "maxBytes": settings.max_bytes,
            "backupCount": settings.backup_count,
            "encoding": "utf-8",
        }
        config["root"]["handlers"].append("file")

    return config


def setup_logging(*, target: LogTarget = "cli", verbose: bool = False) -> None:
    """
    Configure logging once per process.

    Falls back to basicConfig on the console when the file handler cannot
    be created.

    Args:
        target: "cli" or "server"
        verbose: If True, set console to DEBUG level
    """
    global _logging_configured

    if _logging_configured:
        return

    try:
        config = _build_logging_config(
            get_logging_settings(), target=target, verbose=verbose
        )
        logging.config.dictConfig(config)
    except Exception as e:
        sys.stderr.write(f"WARNING: Failed to configure logging: {e}\n")
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format=_TARGETS[target][0],
        )

    _logging_configured = True
