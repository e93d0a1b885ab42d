"""Shared constants for create-cp."""

from __future__ import annotations

DEFAULT_PROJECT_NAME = "cp-project"
MANIFEST_FILE = "package.json"
VCS_DIR = ".git"

# Priority order: first match wins.
LOCK_FILES: tuple[tuple[str, str], ...] = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
)

DEFAULT_PACKAGE_MANAGER = "npm"
USER_AGENT_ENV = "npm_config_user_agent"

__all__ = [
    "DEFAULT_PROJECT_NAME",
    "MANIFEST_FILE",
    "VCS_DIR",
    "LOCK_FILES",
    "DEFAULT_PACKAGE_MANAGER",
    "USER_AGENT_ENV",
]
