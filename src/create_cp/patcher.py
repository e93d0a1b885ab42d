"""Post-clone adjustments: manifest renaming and next-step instructions."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from create_cp.core.constants import DEFAULT_PACKAGE_MANAGER, LOCK_FILES, MANIFEST_FILE

__all__ = [
    "PackageManagerInfo",
    "rewrite_manifest",
    "parse_user_agent",
    "detect_package_manager",
    "next_steps",
    "print_next_steps",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageManagerInfo:
    name: str
    version: str | None = None


def rewrite_manifest(root: Path, package_name: str | None = None) -> str:
    """Set ``name`` in ``root/package.json``; returns the name written.

    Falls back to the directory name when ``package_name`` is empty. Missing
    or malformed manifests propagate as ``OSError`` / ``JSONDecodeError``.
    """
    manifest_path = root / MANIFEST_FILE
    manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    name = package_name or root.resolve().name
    manifest["name"] = name
    manifest_path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Rewrote %s name to %s", manifest_path, name)
    return name


def parse_user_agent(user_agent: str | None) -> PackageManagerInfo | None:
    """Parse ``npm_config_user_agent`` style values (``pnpm/8.6.0 npm/? node/v18``)."""
    if not user_agent or not user_agent.strip():
        return None
    agent = user_agent.split()[0]
    name, _, version = agent.partition("/")
    return PackageManagerInfo(name=name, version=version or None)


def detect_package_manager(
    root: Path,
    user_agent: str | None = None,
    default: str = DEFAULT_PACKAGE_MANAGER,
) -> str:
    """Infer the package manager from a lockfile, then the user agent."""
    entries = {entry.name for entry in root.iterdir()}
    for lock_file, manager in LOCK_FILES:
        if lock_file in entries:
            logger.debug("Found %s, using %s", lock_file, manager)
            return manager

    info = parse_user_agent(user_agent)
    if info and info.name:
        logger.debug("Using %s from user agent", info.name)
        return info.name
    return default


def next_steps(root: Path, cwd: Path, manager: str) -> list[str]:
    """Commands the user should run to start working on the project."""
    lines: list[str] = []
    if root.resolve() != cwd.resolve():
        lines.append(f"cd {os.path.relpath(root, cwd)}")
    if manager == "yarn":
        lines.extend(["yarn", "yarn dev"])
    else:
        lines.extend([f"{manager} install", f"{manager} run dev"])
    return lines


def print_next_steps(console: Console, root: Path, cwd: Path, manager: str) -> None:
    console.print("\n[blue]Done. Now run:[/blue]\n")
    for line in next_steps(root, cwd, manager):
        console.print(f"[blue]  {escape(line)}[/blue]")
    console.print()
