"""Configuration loader module.

This module provides functions for loading configuration from a YAML file and
the environment, and for managing the active process-wide configuration.
"""

from typing import Dict, Any, Optional, List
import os
import re
import threading

import yaml
from pydantic import ValidationError

from .schema import ErrhandlingConfig
from .exceptions import ConfigError

DEFAULT_ENV_PREFIX = "ERRHANDLING"
DEFAULT_CONFIG_FILE = "errhandling.yaml"

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")
_COMPOUND_WORDS = ("exit_code", "log_report")

_active_config: Optional[ErrhandlingConfig] = None
_config_lock = threading.Lock()


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with values that override the base

    Returns:
        Merged dictionary where override values take precedence
    """
    result = base.copy()

    for key, value in override.items():
        if (key in result and
                isinstance(result[key], dict) and
                isinstance(value, dict)):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _substitute(value: str) -> str:
    return _ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), ""), value)


def resolve_env_vars(config: Any) -> Any:
    """Replace ${VAR} patterns with environment variables.

    Args:
        config: Configuration value (dict, list or scalar)

    Returns:
        Configuration with environment variables resolved
    """
    if isinstance(config, dict):
        return {key: resolve_env_vars(value) for key, value in config.items()}
    if isinstance(config, list):
        return [resolve_env_vars(item) for item in config]
    if isinstance(config, str) and "${" in config:
        return _substitute(config)
    return config


def load_yaml_file(path: str) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Dictionary containing configuration from YAML

    Raises:
        ConfigError: If file cannot be read or parsed
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")
    return data


def _normalize_env_key(env_key: str) -> List[str]:
    """Normalize environment variable key to configuration path.

    Args:
        env_key: Environment variable key without prefix (e.g., "TERMINATION_EXIT_CODE")

    Returns:
        List of path segments (e.g., ["termination", "exit_code"])
    """
    path = env_key.lower().split("_")

    i = 0
    while i < len(path) - 1:
        combined = f"{path[i]}_{path[i+1]}"
        if combined in _COMPOUND_WORDS:
            path[i] = combined
            path.pop(i + 1)
        else:
            i += 1

    return path


def _coerce(value: str) -> Any:
    lowered = value.lower()
    if value.lstrip("-").isdigit():
        return int(value)
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    if lowered in ("none", "null"):
        return None
    return value


def load_from_env(prefix: str = DEFAULT_ENV_PREFIX) -> Dict[str, Any]:
    """Load configuration from environment variables with given prefix.

    ``{prefix}_CONFIG`` names the configuration file and is not treated as a
    setting.

    Args:
        prefix: Prefix for environment variables to consider

    Returns:
        Dictionary containing configuration from environment
    """
    result: Dict[str, Any] = {}
    prefix_upper = prefix.upper()

    for key, value in os.environ.items():
        if not key.startswith(f"{prefix_upper}_"):
            continue
        env_key = key[len(prefix_upper) + 1:]
        if env_key == "CONFIG" or not env_key:
            continue

        path = _normalize_env_key(env_key)

        current = result
        for part in path[:-1]:
            current = current.setdefault(part, {})
        current[path[-1]] = _coerce(value)

    return result


def load_config(
    file_path: Optional[str] = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> ErrhandlingConfig:
    """Load ErrhandlingConfig from file and environment.

    Args:
        file_path: Path to config file (defaults to {env_prefix}_CONFIG from env
            or "errhandling.yaml")
        env_prefix: Prefix for environment variables

    Returns:
        Validated ErrhandlingConfig instance

    Raises:
        ConfigError: On loading or validation failure
    """
    path = file_path or os.environ.get(f"{env_prefix}_CONFIG", DEFAULT_CONFIG_FILE)

    config_data: Dict[str, Any] = {}

    if os.path.exists(path):
        config_data = merge_dicts(config_data, load_yaml_file(path))

    # Environment overrides file
    env_config = load_from_env(env_prefix)
    if env_config:
        config_data = merge_dicts(config_data, env_config)

    config_data = resolve_env_vars(config_data)

    try:
        return ErrhandlingConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigError(f"Failed to load configuration: {e}") from e


def get_config() -> ErrhandlingConfig:
    """Return the active configuration, loading it on first use."""
    global _active_config
    if _active_config is None:
        with _config_lock:
            if _active_config is None:
                _active_config = load_config()
    return _active_config


def set_config(config: ErrhandlingConfig) -> None:
    """Replace the active configuration."""
    global _active_config
    with _config_lock:
        _active_config = config


def reset_config() -> None:
    """Drop the active configuration so the next access reloads it."""
    global _active_config
    with _config_lock:
        _active_config = None
