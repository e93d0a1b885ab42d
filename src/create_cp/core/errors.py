"""Exception hierarchy for create-cp."""

from __future__ import annotations

__all__ = [
    "CreateCpError",
    "ConfigError",
    "PromptAborted",
    "FetchError",
    "FetchFailedError",
    "FetchAbortedError",
]


class CreateCpError(Exception):
    """Base class for all create-cp errors."""


class ConfigError(CreateCpError):
    """Raised when the user configuration file cannot be loaded."""


class PromptAborted(CreateCpError):
    """Raised by interactive widgets when the user aborts a prompt."""


class FetchError(CreateCpError):
    """Base class for template fetch failures.

    ``message`` is the short text persisted next to the failure glyph.
    """

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.returncode = returncode


class FetchFailedError(FetchError):
    """The clone process exited with a non-zero status."""


class FetchAbortedError(FetchError):
    """The clone was interrupted by the user."""
