# Repodock Configuration Loader
# Locate and load YAML or JSON configuration files

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from repodock.config.schema import RepodockConfig

CONFIG_ENV = "REPODOCK_CONFIG"
BRANCH_ENV = "REPODOCK_BRANCH"
SCAN_DIRECTORY_ENV = "REPODOCK_SCAN_DIRECTORY"

LOCAL_CONFIG_FILES = ("config.json", "repodock.yaml", "repodock.yml")


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


def get_config_dir() -> Path:
    """Get the repodock configuration directory."""
    return Path.home() / ".config" / "repodock"


def get_config_path(explicit: Optional[Path] = None) -> Optional[Path]:
    """
    Find the configuration file to use.

    Lookup order: explicit path, ``REPODOCK_CONFIG``, ``config.json`` or
    ``repodock.yaml`` in the current directory, then
    ``~/.config/repodock/config.yaml``.

    Args:
        explicit: Path given on the command line.

    Returns:
        Path to the config file, or None if no file was found. An explicit
        or environment path is returned even if it does not exist.
    """
    if explicit is not None:
        return Path(explicit).expanduser()

    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()

    for name in LOCAL_CONFIG_FILES:
        candidate = Path.cwd() / name
        if candidate.is_file():
            return candidate

    user_config = get_config_dir() / "config.yaml"
    if user_config.is_file():
        return user_config

    return None


def _read_file(config_path: Path) -> dict[str, Any]:
    if not config_path.is_file():
        raise ConfigError(f"Configuration file not found: {config_path}")

    # JSON is a subset of YAML, so one parser handles both
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file {config_path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to parse config file {config_path}: expected a mapping at top level")
    return data


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    result = dict(data)

    branch = os.environ.get(BRANCH_ENV)
    if branch:
        result.pop("gitBranch", None)
        result["git_branch"] = branch

    scan_directory = os.environ.get(SCAN_DIRECTORY_ENV)
    if scan_directory:
        result.pop("scanDirectory", None)
        result["scan_directory"] = scan_directory

    return result


def format_validation_error(error: ValidationError) -> list[str]:
    """Flatten a pydantic error into "loc -> field: message" lines."""
    messages = []
    for item in error.errors():
        loc = " -> ".join(str(part) for part in item["loc"])
        messages.append(f"{loc}: {item['msg']}")
    return messages


def load_config(config_path: Optional[Path] = None) -> RepodockConfig:
    """
    Load configuration.

    Environment overrides (``REPODOCK_BRANCH``,
    ``REPODOCK_SCAN_DIRECTORY``) are applied on top of the file. When no
    file is given and none is found, built-in defaults are used.

    Args:
        config_path: Optional explicit path to a YAML or JSON config file.

    Returns:
        RepodockConfig: Validated configuration object.

    Raises:
        ConfigError: If an explicit file is missing, unreadable or invalid.
    """
    resolved = get_config_path(config_path)
    data = _read_file(resolved) if resolved is not None else {}

    try:
        return RepodockConfig.model_validate(_apply_env_overrides(data))
    except ValidationError as e:
        errors = format_validation_error(e)
        raise ConfigError(f"Invalid configuration in {resolved or 'defaults'}", errors=errors)


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file including its repository list.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        return False, [e.message, *e.errors]

    errors = config.validate_repositories()
    return len(errors) == 0, errors
