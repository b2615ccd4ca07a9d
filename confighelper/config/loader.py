# ConfigHelper Options Loader
# Load, save, and validate the YAML host options file

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from confighelper.config.defaults import DEFAULT_CONFIG, generate_default_config
from confighelper.config.schema import HelperConfig


def get_config_dir() -> Path:
    """Get the confighelper options directory."""
    return Path.home() / ".config" / "confighelper"


def get_config_path() -> Path:
    """Get the path to the options file."""
    env_path = os.environ.get("CONFIGHELPER_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> HelperConfig:
    """
    Load host options from YAML file.

    Args:
        config_path: Optional path to options file. Uses default if not provided.

    Returns:
        HelperConfig: Validated options.

    Raises:
        FileNotFoundError: If options file doesn't exist.
        ValidationError: If options file is invalid.
        ValueError: If options file does not contain a mapping.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Options file not found: {config_path}\nRun 'confighelper options init' to create one."
        )

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ValueError(f"Options file must contain a mapping: {config_path}")

    return HelperConfig.model_validate(_merge_with_defaults(data))


def load_or_default_config(config_path: Optional[Path] = None) -> HelperConfig:
    """Load host options, falling back to defaults when the file is absent."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return HelperConfig.model_validate(_merge_with_defaults({}))


def save_config(config: HelperConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save host options to YAML file.

    Returns:
        Path: Path where options were saved.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(exclude_none=True, mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Ensure options file exists, creating default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate an options file without loading it into the system.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return False, [f"Options file not found: {config_path}"]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        return False, ["Options file is empty"]

    if not isinstance(data, dict):
        return False, ["Options file must contain a mapping"]

    errors: list[str] = []
    try:
        HelperConfig.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    if "document" not in data:
        errors.append("Missing 'document' setting")

    return len(errors) == 0, errors


def _merge_with_defaults(data: dict) -> dict:
    """Merge loaded data with default values for missing keys."""
    result = {**DEFAULT_CONFIG, **{k: v for k, v in data.items() if k != "output"}}
    output = data.get("output") or {}
    # Anything but a mapping is left for schema validation to reject
    result["output"] = {**DEFAULT_CONFIG["output"], **output} if isinstance(output, dict) else output
    return result
