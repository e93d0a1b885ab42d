"""Prompt steps of the session resolver.

Each :class:`Step` pairs a skip predicate with an action. Predicates only
read the accumulated :class:`ResolutionState` and the fixed
:class:`ResolverContext`, so they can be tested without any prompting.
Actions write their answer into the state and may return :class:`Cancelled`
to stop the resolution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from create_cp.core.package_name import is_valid_package_name, to_valid_package_name
from create_cp.core.paths import format_target_dir, is_empty

from .models import CANCELLED_MESSAGE, Cancelled, ResolutionState, ResolverContext
from .prompter import Choice, Prompter

__all__ = [
    "StepName",
    "Step",
    "STEPS",
    "skip_project_name",
    "skip_overwrite",
    "skip_overwrite_check",
    "skip_package_name",
    "skip_owner",
    "skip_framework",
    "overwrite_message",
    "owner_message",
]

logger = logging.getLogger(__name__)

INVALID_PACKAGE_NAME = "Invalid package.json name"


class StepName(str, Enum):
    PROJECT_NAME = "project-name"
    OVERWRITE = "overwrite"
    OVERWRITE_CHECK = "overwrite-check"
    PACKAGE_NAME = "package-name"
    OWNER = "owner"
    FRAMEWORK = "framework"


Predicate = Callable[[ResolutionState, ResolverContext], bool]
Action = Callable[[ResolutionState, ResolverContext, Prompter], Optional[Cancelled]]


@dataclass(frozen=True)
class Step:
    name: StepName
    skip: Predicate
    run: Action


# ---------------------------------------------------------------------------
# Skip predicates
# ---------------------------------------------------------------------------


def skip_project_name(state: ResolutionState, ctx: ResolverContext) -> bool:
    return state.target_dir_given


def skip_overwrite(state: ResolutionState, ctx: ResolverContext) -> bool:
    target = ctx.cwd / state.target_dir
    if not target.exists():
        return True
    return target.is_dir() and is_empty(target)


def skip_overwrite_check(state: ResolutionState, ctx: ResolverContext) -> bool:
    return False


def skip_package_name(state: ResolutionState, ctx: ResolverContext) -> bool:
    return is_valid_package_name(state.project_name(ctx.cwd))


def skip_owner(state: ResolutionState, ctx: ResolverContext) -> bool:
    return bool(state.template) and state.template in ctx.catalog


def skip_framework(state: ResolutionState, ctx: ResolverContext) -> bool:
    return state.owner is None or not state.owner.children


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


def overwrite_message(target_dir: str) -> str:
    where = "Current directory" if target_dir == "." else f'Target directory "{target_dir}"'
    return f"{where} is not empty. Remove existing files and continue?"


def owner_message(template: str | None, ctx: ResolverContext) -> str:
    if isinstance(template, str) and template not in ctx.catalog:
        return f'"{template}" isn\'t a valid template. Please choose from below: '
    return "Select a owner:"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def ask_project_name(state: ResolutionState, ctx: ResolverContext, prompter: Prompter) -> None:
    def track(raw: str) -> None:
        state.target_dir = format_target_dir(raw) or ctx.default_project_name

    track("")
    value = prompter.text("Project name:", default=ctx.default_project_name, on_change=track)
    track(value)
    return None


def ask_overwrite(state: ResolutionState, ctx: ResolverContext, prompter: Prompter) -> None:
    state.overwrite = prompter.confirm(overwrite_message(state.target_dir), default=False)
    return None


def check_overwrite(state: ResolutionState, ctx: ResolverContext, prompter: Prompter) -> Cancelled | None:
    if state.overwrite is False:
        logger.debug("Overwrite of %s declined", state.target_dir)
        return Cancelled(CANCELLED_MESSAGE)
    return None


def _validate_package_name(value: str) -> bool | str:
    return is_valid_package_name(value) or INVALID_PACKAGE_NAME


def ask_package_name(state: ResolutionState, ctx: ResolverContext, prompter: Prompter) -> None:
    state.package_name = prompter.text(
        "Package name:",
        default=to_valid_package_name(state.project_name(ctx.cwd)),
        validate=_validate_package_name,
    )
    return None


def ask_owner(state: ResolutionState, ctx: ResolverContext, prompter: Prompter) -> None:
    choices = [
        Choice(
            key=owner.name,
            value=owner,
            label=owner.label(),
            description=", ".join(child.name for child in owner.children),
        )
        for owner in ctx.owners
    ]
    state.owner = prompter.select(owner_message(state.template, ctx), choices)
    return None


def ask_framework(state: ResolutionState, ctx: ResolverContext, prompter: Prompter) -> None:
    owner = state.owner
    if owner is None:
        return None
    choices = [
        Choice(key=variant.name, value=variant.locator, label=variant.label())
        for variant in owner.children
    ]
    state.framework = prompter.select("Select a framework:", choices)
    return None


STEPS: tuple[Step, ...] = (
    Step(StepName.PROJECT_NAME, skip_project_name, ask_project_name),
    Step(StepName.OVERWRITE, skip_overwrite, ask_overwrite),
    Step(StepName.OVERWRITE_CHECK, skip_overwrite_check, check_overwrite),
    Step(StepName.PACKAGE_NAME, skip_package_name, ask_package_name),
    Step(StepName.OWNER, skip_owner, ask_owner),
    Step(StepName.FRAMEWORK, skip_framework, ask_framework),
)
