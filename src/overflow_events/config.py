"""Configuration management for overflow-events."""

import logging
import math
import os
import sys
import tomllib

from pathlib import Path
from typing import Any

import tomli_w

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from overflow_events.constants import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_DATASET_FILE,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_MAX_BYTES,
    DEFAULT_MAX_GAP_MINUTES,
    DEFAULT_MIN_DURATION_MINUTES,
    DEFAULT_THRESHOLD,
    DETECTION_CONFIG_KEYS,
)

logger = logging.getLogger(__name__)

# Keys settable through `overflow-events config set`, mapped to their section
SETTABLE_KEYS: dict[str, str] = {
    **{key: "detection" for key in DETECTION_CONFIG_KEYS},
    "dataset": "dataset",
}


class DetectionDefaults(BaseModel):
    """Default detection parameters, in minutes, after applying config."""

    model_config = ConfigDict(allow_inf_nan=False)

    threshold: float = Field(default=DEFAULT_THRESHOLD)
    min_duration_minutes: float = Field(default=DEFAULT_MIN_DURATION_MINUTES)
    max_gap_minutes: float = Field(default=DEFAULT_MAX_GAP_MINUTES)


class LoggingSettings(BaseModel):
    """File logging settings from the [logging] config section."""

    enabled: bool = Field(default=True, description="Write a rotating log file")
    level: str = Field(default="DEBUG", description="File handler level")
    max_size_mb: float = Field(
        default=DEFAULT_LOG_MAX_BYTES / (1024 * 1024), gt=0, allow_inf_nan=False
    )
    backup_count: int = Field(default=DEFAULT_LOG_BACKUP_COUNT, ge=0)

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: '{value}'")
        return level

    @property
    def max_bytes(self) -> int:
        return int(self.max_size_mb * 1024 * 1024)


def get_config_path() -> Path:
    """
    Get the path to the configuration file.

    Returns:
        Path to ~/.overflow_events/config.toml
    """
    return DEFAULT_CONFIG_DIR / "config.toml"


def load_config() -> dict[str, Any]:
    """
    Load configuration from TOML file.

    Returns:
        Configuration dictionary. Returns empty dict if file doesn't exist
        or is corrupted.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return {}

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Treating config as empty. Fix or delete the file to resolve.")
        return {}


def save_config(config: dict[str, Any]) -> None:
    """
    Save configuration to TOML file using atomic write.

    Creates the parent directory if it doesn't exist.
    Uses temp file + rename for atomic operation.

    Args:
        config: Configuration dictionary to save

    Raises:
        PermissionError: If directory cannot be created or file cannot be written
    """
    config_path = get_config_path()

    config_dir = config_path.parent
    try:
        os.makedirs(config_dir, exist_ok=True)
    except PermissionError as e:
        raise PermissionError(
            f"Cannot create config directory {config_dir}: {e}"
        ) from e

    temp_path = config_path.with_suffix(".toml.tmp")

    try:
        with open(temp_path, "wb") as f:
            tomli_w.dump(config, f)

        os.replace(temp_path, config_path)

    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


def get_detection_defaults() -> DetectionDefaults:
    """
    Get default detection parameters, with [detection] config overrides.

    Invalid values in the config file are logged and ignored.
    """
    section = load_config().get("detection", {})
    if not isinstance(section, dict):
        return DetectionDefaults()

    overrides = {k: v for k, v in section.items() if k in DETECTION_CONFIG_KEYS}
    try:
        return DetectionDefaults(**overrides)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid [detection] config: {e}")
        return DetectionDefaults()


def get_logging_settings() -> LoggingSettings:
    """
    Get file logging settings from the [logging] config section.

    Invalid values are reported on stderr and the built-in settings are used,
    since logging is not configured yet when this runs.
    """
    section = load_config().get("logging", {})
    if not isinstance(section, dict):
        return LoggingSettings()

    try:
        return LoggingSettings(**section)
    except ValidationError as e:
        sys.stderr.write(f"WARNING: Ignoring invalid [logging] config: {e}\n")
        return LoggingSettings()


def get_dataset_path() -> Path:
    """
    Get the dataset path from config.

    Returns:
        Configured [dataset] path, or the default file in the working directory
    """
    path: str | None = load_config().get("dataset", {}).get("path")
    return Path(path) if path else Path(DEFAULT_DATASET_FILE)


def set_config_value(key: str, value: str) -> Any:
    """
    Set a default in the config file.

    Detection values are stored as floats; `dataset` is stored as a path string.

    Args:
        key: One of SETTABLE_KEYS
        value: Raw value from the command line

    Returns:
        The stored value

    Raises:
        ValueError: If the key is unknown or the value is not a number
    """
    section = _section_for(key)
    config = load_config()

    stored: Any
    if section == "dataset":
        config.setdefault("dataset", {})["path"] = stored = value
    else:
        try:
            stored = float(value)
        except ValueError:
            raise ValueError(f"Invalid value for {key}: '{value}'. Expected a number") from None
        if not math.isfinite(stored):
            raise ValueError(
                f"Invalid value for {key}: '{value}'. Expected a finite number"
            )
        config.setdefault("detection", {})[key] = stored

    save_config(config)
    return stored


def unset_config_value(key: str) -> bool:
    """
    Remove a default from the config file.

    If this was the only setting in its section, removes the section.
    If config becomes empty, deletes the config file.

    Returns:
        True if a value was removed

    Raises:
        ValueError: If the key is unknown
    """
    section = _section_for(key)
    option = "path" if section == "dataset" else key
    config = load_config()

    if section not in config or option not in config[section]:
        return False

    del config[section][option]
    if not config[section]:
        del config[section]

    if not config:
        config_path = get_config_path()
        if config_path.exists():
            config_path.unlink()
    else:
        save_config(config)
    return True


def _section_for(key: str) -> str:
    if key not in SETTABLE_KEYS:
        raise ValueError(
            f"Unknown config key: '{key}'. Valid keys are: {', '.join(SETTABLE_KEYS)}"
        )
    return SETTABLE_KEYS[key]
