"""npm package name validation and derivation."""

from __future__ import annotations

import re

__all__ = ["is_valid_package_name", "to_valid_package_name"]


_VALID_NAME = re.compile(r"^(?:@[a-z0-9-*~][a-z0-9-*._~]*/)?[a-z0-9-~][a-z0-9-._~]*$")
_WHITESPACE = re.compile(r"\s+")
_LEADING_DOT_OR_UNDERSCORE = re.compile(r"^[._]")
_INVALID_CHARS = re.compile(r"[^a-z0-9-~]+")


def is_valid_package_name(name: str) -> bool:
    """Return True when ``name`` is an (optionally scoped) npm package name."""
    return bool(_VALID_NAME.match(name))


def to_valid_package_name(name: str) -> str:
    """Derive a package name candidate from a project or directory name.

    The result contains only ``[a-z0-9-~]``. Input made entirely of invalid
    characters can collapse to ``""`` or ``"-"``; callers re-validate.
    """
    candidate = name.strip().lower()
    candidate = _WHITESPACE.sub("-", candidate)
    candidate = _LEADING_DOT_OR_UNDERSCORE.sub("", candidate)
    return _INVALID_CHARS.sub("-", candidate)
