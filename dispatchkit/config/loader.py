"""Configuration loading from files and environment variables."""
import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from dispatchkit.domain.base.exceptions import ConfigurationError

ENV_PREFIX = "DISPATCHKIT_"
ENV_NESTED_SEPARATOR = "__"


def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load configuration data from a JSON or YAML file.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping
    """
    config_path = Path(os.path.expandvars(path))
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        text = config_path.read_text(encoding="utf-8")
        if config_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration in {config_path} must be a mapping, got {type(data).__name__}"
        )
    return data


def apply_environment_overrides(data: Dict[str, Any],
                                environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Overlay DISPATCHKIT_* environment variables onto configuration data.

    ``DISPATCHKIT_LOGGING__LEVEL=DEBUG`` sets ``data["logging"]["level"]``.
    Values are parsed as YAML scalars, so ``true`` and ``10`` keep their types.

    Returns:
        A new dictionary; the input is not modified
    """
    environ = os.environ if environ is None else environ
    result = copy.deepcopy(data)

    for name, raw_value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        path = [part.lower() for part in name[len(ENV_PREFIX):].split(ENV_NESTED_SEPARATOR) if part]
        if not path:
            continue
        set_nested(result, path, _parse_scalar(raw_value))

    return result


def get_nested(data: Mapping[str, Any], path: list, default: Any = None) -> Any:
    """Walk a key path through nested mappings."""
    value: Any = data
    for key in path:
        if isinstance(value, Mapping) and key in value:
            value = value[key]
        else:
            return default
    return value


def set_nested(data: Dict[str, Any], path: list, value: Any) -> None:
    """Set a value at a key path, creating intermediate mappings."""
    current = data
    for key in path[:-1]:
        child = current.get(key)
        if not isinstance(child, dict):
            child = {}
            current[key] = child
        current = child
    current[path[-1]] = value


def _parse_scalar(raw_value: str) -> Any:
    try:
        value = yaml.safe_load(raw_value)
    except yaml.YAMLError:
        return raw_value
    if isinstance(value, (dict, list)):
        return raw_value
    return raw_value if value is None else value
