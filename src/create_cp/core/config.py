"""User configuration for create-cp.

Settings live in ``<home>/config.toml`` under a ``[create]`` table::

    [create]
    default_project_name = "cp-project"
    git_executable = "git"
    default_package_manager = "npm"

The home directory resolves in this order:

1. ``CREATE_CP_HOME`` environment variable (all platforms)
2. ``%LOCALAPPDATA%\\create-cp`` on Windows (via platformdirs)
3. ``~/.create-cp`` elsewhere
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import toml  # type: ignore[import-untyped]

from .constants import DEFAULT_PACKAGE_MANAGER, DEFAULT_PROJECT_NAME, USER_AGENT_ENV
from .errors import ConfigError

__all__ = ["CreateCpConfig", "get_create_cp_home", "load_config"]

logger = logging.getLogger(__name__)

CONFIG_SECTION = "create"


@dataclass(frozen=True)
class CreateCpConfig:
    """Resolved runtime settings."""

    default_project_name: str = DEFAULT_PROJECT_NAME
    git_executable: str = "git"
    default_package_manager: str = DEFAULT_PACKAGE_MANAGER
    user_agent_env: str = USER_AGENT_ENV

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "CreateCpConfig":
        known = {f.name for f in fields(cls)}
        values: dict[str, str] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown config key %r", key)
                continue
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"Config key '{key}' must be a non-empty string")
            values[key] = value.strip()
        return cls(**values)


def _is_windows() -> bool:
    return os.name == "nt"


def get_create_cp_home() -> Path:
    """Return the directory holding ``config.toml``."""
    if env_home := os.environ.get("CREATE_CP_HOME"):
        return Path(env_home)

    if _is_windows():
        from platformdirs import user_data_dir

        return Path(user_data_dir("create-cp"))

    return Path.home() / ".create-cp"


def load_config(path: Path | None = None) -> CreateCpConfig:
    """Load settings from ``path`` (default: the home config file).

    A missing file yields the defaults. Unparseable files raise
    :class:`ConfigError`.
    """
    config_file = path or get_create_cp_home() / "config.toml"
    if not config_file.exists():
        logger.debug("No config file at %s, using defaults", config_file)
        return CreateCpConfig()

    try:
        raw: dict[str, Any] = toml.load(config_file)
    except (toml.TomlDecodeError, OSError) as exc:
        raise ConfigError(f"Could not read {config_file}: {exc}") from exc

    section = raw.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{CONFIG_SECTION}] in {config_file} must be a table")

    logger.debug("Loaded config from %s", config_file)
    return CreateCpConfig.from_mapping(section)
