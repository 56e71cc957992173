# Repodock Configuration Module
# Handles YAML/JSON configuration loading and validation

from repodock.config.loader import (
    ConfigError,
    get_config_dir,
    get_config_path,
    load_config,
    validate_config_file,
)
from repodock.config.schema import (
    DockerConfig,
    OutputConfig,
    RepodockConfig,
    RepositoryEntry,
)

__all__ = [
    # Schema
    "RepodockConfig",
    "RepositoryEntry",
    "DockerConfig",
    "OutputConfig",
    # Loader
    "ConfigError",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "validate_config_file",
]
