# ConfigHelper Options Module
# Handles YAML-based host options loading, validation, and defaults

from confighelper.config.defaults import DEFAULT_CONFIG, generate_default_config
from confighelper.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    load_or_default_config,
    save_config,
    validate_config_file,
)
from confighelper.config.schema import HelperConfig, OutputConfig

__all__ = [
    # Schema
    "HelperConfig",
    "OutputConfig",
    # Loader
    "load_config",
    "load_or_default_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
