"""Value types produced and consumed by the session resolver."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Union

from create_cp.core.constants import DEFAULT_PROJECT_NAME
from create_cp.core.paths import format_target_dir
from create_cp.template.catalog import TemplateNode

__all__ = [
    "CANCELLED_MESSAGE",
    "Cancelled",
    "ResolvedSession",
    "Resolution",
    "ResolutionState",
    "ResolverContext",
]

CANCELLED_MESSAGE = "Operation cancelled"


@dataclass(frozen=True)
class ResolvedSession:
    """Everything the fetcher needs: where to clone, what, and under which name."""

    target_dir: str
    package_name: str
    template_locator: str
    overwrite: bool = False

    def root(self, cwd: Path) -> Path:
        return cwd / self.target_dir


@dataclass(frozen=True)
class Cancelled:
    """The user backed out before a session was fully resolved."""

    reason: str = CANCELLED_MESSAGE


Resolution = Union[ResolvedSession, Cancelled]


@dataclass(frozen=True)
class ResolverContext:
    """Inputs fixed for the whole resolution."""

    owners: tuple[TemplateNode, ...]
    catalog: Mapping[str, str]
    cwd: Path
    default_project_name: str = DEFAULT_PROJECT_NAME


@dataclass
class ResolutionState:
    """Answers accumulated while walking the prompt steps."""

    target_dir: str
    template: str | None = None
    target_dir_given: bool = False
    overwrite: bool | None = None
    package_name: str | None = None
    owner: TemplateNode | None = None
    framework: str | None = None

    @classmethod
    def initial(cls, target_dir: str | None, template: str | None) -> "ResolutionState":
        normalized = format_target_dir(target_dir) or ""
        return cls(
            target_dir=normalized,
            template=template,
            target_dir_given=bool(normalized),
        )

    def project_name(self, cwd: Path) -> str:
        """Name used for the package: the target, or the cwd's name for ``.``."""
        if self.target_dir == ".":
            return cwd.resolve().name
        return self.target_dir
