"""Configuration loading.

Configuration is read from .hyptrack.toml, found by walking up from the
working directory. A .hyptrack.local.toml next to it (meant to stay out of
version control) is deep-merged on top, then HYPTRACK_<SECTION>_<KEY>
environment variables override individual values.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from hyptrack.config.defaults import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    ENV_PREFIX,
    LOCAL_CONFIG_FILENAME,
)
from hyptrack.exceptions import ConfigError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Read-only view of a configuration dict with dotted-key access."""

    def __init__(self, data: dict[str, Any], path: Path | None = None) -> None:
        self._data = data
        self.path = path

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConfigLoader:
        """Create a loader around a plain dict (no defaults applied)."""
        return cls(copy.deepcopy(data))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key, e.g. "roadmap.policy"."""
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def as_dict(self) -> dict[str, Any]:
        """Return a deep copy of the underlying data."""
        return copy.deepcopy(self._data)


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base.

    Nested dicts are merged key by key; any other value in override
    replaces the base value.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def find_config_file(start: Path | None = None) -> Path | None:
    """Find .hyptrack.toml in start or one of its parents.

    The search stops at a git repository root (a directory containing
    .git) so configuration never leaks in from outside the repository.

    Args:
        start: Directory to start from (default: current directory).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if (current / ".git").exists() or current == current.parent:
            return None
        current = current.parent


def _read_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML file into plain Python types."""
    try:
        document = tomlkit.parse(path.read_text(encoding="utf-8"))
    except TOMLKitError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e
    return document.unwrap()


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment variable value.

    "true"/"false" (any case) become booleans, JSON arrays and objects are
    decoded, everything else (including malformed JSON) stays a string.
    """
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.strip().startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply HYPTRACK_<SECTION>_<KEY> environment variables.

    HYPTRACK_ROADMAP_POLICY=simple sets config["roadmap"]["policy"].
    Sections are created when missing.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        config.setdefault(section, {})
        if not isinstance(config[section], dict):
            continue
        config[section][key] = _try_parse_env_value(raw)
        logger.debug("Config %s.%s set from %s", section, key, name)
    return config


def load_config(path: Path | None = None) -> ConfigLoader:
    """Load configuration merged over the defaults.

    Args:
        path: Config file to read. When None, find_config_file() is used,
            and if nothing is found only defaults and env overrides apply.

    Returns:
        ConfigLoader over the merged configuration.

    Raises:
        ConfigError: If a config file is not valid TOML.
        FileNotFoundError: If an explicit path does not exist.
    """
    if path is None:
        path = find_config_file()
    elif not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = copy.deepcopy(DEFAULT_CONFIG)
    if path is not None:
        data = merge_configs(data, _read_toml(path))
        local = path.parent / LOCAL_CONFIG_FILENAME
        if local.is_file():
            data = merge_configs(data, _read_toml(local))
        logger.debug("Loaded config from %s", path)

    data = _apply_env_overrides(data)
    return ConfigLoader(data, path=path)


__all__ = [
    "ConfigLoader",
    "find_config_file",
    "load_config",
    "merge_configs",
]
