"""Configuration loader for the manifest checker.

Reads settings from a JSON file and validates the structure by hand. Every key
is optional:

- ``sections``: package.json dependency sections to check
- ``exclude``: directory names skipped during manifest discovery
- ``logLevel``: loguru level name used by the CLI
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .discovery import EXCLUDES
from .parsers.package_json import DEFAULT_SECTIONS

CONFIG_FILENAME = "npm-semver.json"
CONFIG_PATH_ENV_VAR = "NPM_SEMVER_CONFIG"
DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    sections: tuple[str, ...] = DEFAULT_SECTIONS
    exclude: tuple[str, ...] = tuple(sorted(EXCLUDES))
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a decoded JSON object, validating each field."""
        defaults = cls()
        sections = _string_list(data, "sections", defaults.sections)
        if not sections:
            raise ConfigError("'sections' must contain at least one entry")
        exclude = _string_list(data, "exclude", defaults.exclude)

        log_level = data.get("logLevel", defaults.log_level)
        if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
            known = ", ".join(sorted(LOG_LEVELS))
            raise ConfigError(f"Invalid 'logLevel' field (must be one of {known})")

        return cls(sections=sections, exclude=exclude, log_level=log_level.upper())


def _string_list(data: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be an array")
    for index, item in enumerate(value):
        if not isinstance(item, str) or not item:
            raise ConfigError(f"'{key}' entry at index {index} must be a non-empty string")
    return tuple(value)


def _resolve_config_path(path: Path | str | None, root: Path | None) -> tuple[Path | None, bool]:
    """Resolve the configuration file path and whether it must exist.

    Priority:
    1. Explicit path argument
    2. NPM_SEMVER_CONFIG environment variable
    3. npm-semver.json in the checked root, when present
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    if root is not None:
        return root / CONFIG_FILENAME, False

    return None, False


def load_settings(path: Path | str | None = None, root: Path | None = None) -> Settings:
    """Load and validate settings, falling back to defaults.

    Args:
        path: Optional path to the config file. If not provided, uses the
            NPM_SEMVER_CONFIG env var or an npm-semver.json found in ``root``.
        root: Directory being checked.

    Returns:
        A validated Settings object.

    Raises:
        ConfigError: If a required file is missing, unreadable or invalid.
    """
    config_path, required = _resolve_config_path(path, root)
    if config_path is None:
        return Settings()

    if not config_path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return Settings.from_dict(data)
