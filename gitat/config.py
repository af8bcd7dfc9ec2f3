"""User configuration for gitat.

Configuration is read from ~/.gitat/config.yaml (or the file named by the
GITAT_CONFIG environment variable). Every key is optional:

    viewer: ["git", "show"]   # command run by --show, list or string
    summary: false            # default for --summary
    log_level: WARNING        # default log level
"""

import logging
import os
import shlex
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from gitat.presenter import DEFAULT_VIEWER_COMMAND


class ConfigError(Exception):
    """Raised when there's an error with the configuration file."""
    pass


_CONFIG_DIR = Path.home() / ".gitat"

CONFIG_ENV_VAR = "GITAT_CONFIG"


class AtConfig(BaseModel):
    """Validated configuration values."""

    viewer: list[str] = list(DEFAULT_VIEWER_COMMAND)
    summary: bool = False
    log_level: str = "WARNING"

    @field_validator("viewer", mode="before")
    @classmethod
    def split_viewer_command(cls, v: Union[str, list]) -> list:
        """Accept the viewer as a shell-like string or a list."""
        if isinstance(v, str):
            v = shlex.split(v)
        if not v:
            raise ValueError("viewer command cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def get_config_dir() -> Path:
    """Get the gitat configuration directory.

    Returns:
        Path to ~/.gitat/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to the config file.

    Returns:
        Path from GITAT_CONFIG if set, else ~/.gitat/config.yaml
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.yaml"


def load_raw_config() -> Dict[str, Any]:
    """Load the configuration file as a dictionary.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise ConfigError(f"Failed to load config from {config_file}: expected a mapping")
    return config


def load_config() -> AtConfig:
    """Load and validate the configuration.

    Returns:
        The validated configuration, with defaults for missing keys.

    Raises:
        ConfigError: If the file is unreadable or holds invalid values.
    """
    raw = load_raw_config()
    try:
        return AtConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {get_config_file_path()}: {e}")
