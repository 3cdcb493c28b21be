"""User configuration for completion output."""

import os
from pathlib import Path

import yaml

DEFAULT_COLUMNS = 80
DEFAULT_VERBOSITY = 1


def get_config_dir() -> Path:
    """Directory holding config.yaml ($XDG_CONFIG_HOME/flagcomp or ~/.config/flagcomp)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "flagcomp"
    return Path.home() / ".config" / "flagcomp"


def get_config_file() -> Path:
    return get_config_dir() / "config.yaml"


def load_config() -> dict:
    """Load config from config.yaml."""
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    try:
        return yaml.safe_load(config_file.read_text()) or {}
    except yaml.YAMLError:
        return {}


def save_config(config: dict) -> None:
    """Save config to config.yaml."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    get_config_file().write_text(yaml.dump(config, default_flow_style=False))


def get_columns() -> int:
    """Get the output column width with resolution priority.

    Priority:
    1. FLAGCOMP_COLUMNS environment variable
    2. Config file
    3. DEFAULT_COLUMNS
    """
    env_columns = os.environ.get("FLAGCOMP_COLUMNS")
    if env_columns:
        try:
            columns = int(env_columns)
        except ValueError:
            columns = 0
        if columns > 0:
            return columns

    config = load_config()
    columns = config.get("columns")
    if isinstance(columns, int) and columns > 0:
        return columns

    return DEFAULT_COLUMNS


def set_columns(columns: int) -> None:
    """Save the output column width to config file."""
    if columns <= 0:
        raise ValueError("Column width must be a positive integer")
    config = load_config()
    config["columns"] = columns
    save_config(config)


def get_verbosity() -> int:
    """Get verbosity level (default: 1).

    Levels:
    - 0: Silent (only errors)
    - 1: Normal
    - 2: Verbose (pipeline stages)
    - 3: Debug (per-flag decisions)
    """
    env_verbosity = os.environ.get("FLAGCOMP_VERBOSITY")
    if env_verbosity and env_verbosity.isdigit() and int(env_verbosity) <= 3:
        return int(env_verbosity)
    config = load_config()
    level = config.get("verbosity")
    if isinstance(level, int) and not isinstance(level, bool) and 0 <= level <= 3:
        return level
    return DEFAULT_VERBOSITY


def set_verbosity(level: int) -> None:
    """Save verbosity level to config file (0-3)."""
    if not 0 <= level <= 3:
        raise ValueError("Verbosity level must be between 0 and 3")
    config = load_config()
    config["verbosity"] = level
    save_config(config)
