"""Target directory helpers: normalisation, emptiness checks and clearing."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from .constants import VCS_DIR

__all__ = ["format_target_dir", "is_empty", "empty_dir"]

logger = logging.getLogger(__name__)

# Trailing separators may be interleaved with whitespace ("app/ /").
_TRAILING = re.compile(r"[\s/]+$")


def format_target_dir(value: str | None) -> str | None:
    """Trim ``value`` and drop trailing path separators.

    ``None`` is passed through so callers can tell "not given" from "empty".
    """
    if value is None:
        return None
    return _TRAILING.sub("", value.strip())


def is_empty(path: str | Path) -> bool:
    """Return True when ``path`` has no entries or only a ``.git`` directory."""
    entries = [entry.name for entry in Path(path).iterdir()]
    return not entries or entries == [VCS_DIR]


def empty_dir(path: str | Path) -> None:
    """Remove every entry below ``path``; a missing directory is a no-op.

    A regular file at ``path`` is removed so the clone can create the
    directory. Entries that vanish mid-way are ignored; any other
    ``OSError`` propagates.
    """
    directory = Path(path)
    if not directory.exists():
        return
    if not directory.is_dir():
        logger.debug("Removing file %s", directory)
        directory.unlink(missing_ok=True)
        return

    for entry in directory.iterdir():
        logger.debug("Removing %s", entry)
        if entry.is_dir() and not entry.is_symlink():
            try:
                shutil.rmtree(entry)
            except FileNotFoundError:
                pass
        else:
            entry.unlink(missing_ok=True)
